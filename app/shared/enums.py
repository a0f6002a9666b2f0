"""Shared enumerations for execution tracking.

Cross-cutting lifecycle enums used by the engines and the API schemas.
Definition-level enums (step types, operators) live in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle: RUNNING is initial, COMPLETED/FAILED are terminal."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not WorkflowExecutionStatus.RUNNING


class StepStatus(_ValuesMixin, str, Enum):
    """Per-step status inside a workflow execution snapshot."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ActionOutcome(_ValuesMixin, str, Enum):
    """Outcome of one action inside a rule firing."""

    SUCCESS = "success"
    FAILED = "failed"


class NotificationType(_ValuesMixin, str, Enum):
    """Notification types created by the reminder jobs."""

    DUES_REMINDER = "dues_reminder"
    EVENT_REMINDER = "event_reminder"
