"""DTOs for member notifications."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NotificationCreate:
    """Data to create one in-app notification."""

    member_id: str
    type: str
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ReminderRunResult:
    """Outcome of one reminder job run."""

    job: str
    sent: int
    notification_ids: list[str] = field(default_factory=list)
