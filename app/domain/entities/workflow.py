"""Workflow domain entity.

A workflow is a flat, ordered list of typed steps (trigger, condition,
action, delay) executed sequentially for one invocation. Step configuration
is an open key-value mapping; only the fields a step type reads matter.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import StepType, WorkflowStatus


@dataclass(frozen=True)
class StepSpec:
    """One workflow step. Immutable once an invocation starts."""

    id: str
    type: str
    config: dict[str, Any] = field(default_factory=dict)

    @property
    def is_known_type(self) -> bool:
        return self.type in StepType.values()

    def configured_delay(self) -> Any:
        """Raw delay for a delay step (delayMs or delay_ms), None when unset."""
        value = self.config.get("delayMs")
        return self.config.get("delay_ms") if value is None else value

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int) -> "StepSpec":
        """Build a step from a stored mapping; missing id falls back to its position."""
        raw_config = data.get("config")
        return cls(
            id=str(data.get("id") or f"step-{position + 1}"),
            type=str(data.get("type") or ""),
            config=dict(raw_config) if isinstance(raw_config, dict) else {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": self.type, "config": dict(self.config)}


@dataclass
class WorkflowEntity:
    """Domain entity for a workflow definition (status + ordered steps)."""

    id: str
    name: str
    description: str | None
    status: str
    steps: list[StepSpec]
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_runnable(self) -> bool:
        """Return whether this workflow may be invoked (only 'active' is runnable)."""
        return self.status == WorkflowStatus.ACTIVE.value
