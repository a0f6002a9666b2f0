"""Caller identity DTO."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller (subject of a verified bearer token)."""

    uid: str
    claims: dict[str, Any] = field(default_factory=dict)
