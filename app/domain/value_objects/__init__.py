"""Domain value objects and shared value types."""

from app.domain.value_objects.actions import (
    ActionSpec,
    AwardPointsAction,
    CreateRecordAction,
    SendEmailAction,
    UpdateFieldAction,
    parse_action_spec,
)

__all__ = [
    "ActionSpec",
    "AwardPointsAction",
    "CreateRecordAction",
    "SendEmailAction",
    "UpdateFieldAction",
    "parse_action_spec",
]
