"""Jinja rendering of send_email subject and body (implements IMessageRenderer).

Templates see the action context as top-level names: workflow input and
earlier step outputs, or ``collection``, ``documentId``, ``document`` and
``ruleId`` for rule actions. Rendering is sandboxed since templates are
user-authored.
"""

from __future__ import annotations

from typing import Any

from jinja2 import StrictUndefined, Undefined
from jinja2.sandbox import SandboxedEnvironment


class JinjaMessageRenderer:
    """Renders user-authored templates in a sandboxed Jinja environment."""

    def __init__(self, strict: bool = False) -> None:
        self._env = SandboxedEnvironment(
            autoescape=False,
            undefined=StrictUndefined if strict else Undefined,
        )

    def render(self, template: str, context: dict[str, Any]) -> str:
        if "{" not in template:
            return template
        return self._env.from_string(template).render(**context)
