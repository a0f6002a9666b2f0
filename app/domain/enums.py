"""Domain enumerations for the automation engine.

Enums represent fixed sets of domain values (workflow status, step and
action types, condition operators). Stored documents keep the plain
string values; unknown strings are tolerated where the engine must
degrade gracefully (e.g. an unknown operator evaluates to False).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowStatus(_ValuesMixin, str, Enum):
    """Workflow definition status. Only ACTIVE workflows are runnable."""

    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class StepType(_ValuesMixin, str, Enum):
    """Workflow step (node) types."""

    TRIGGER = "trigger"
    CONDITION = "condition"
    ACTION = "action"
    DELAY = "delay"


class ActionType(_ValuesMixin, str, Enum):
    """Closed catalog of side-effecting actions."""

    SEND_EMAIL = "send_email"
    UPDATE_FIELD = "update_field"
    CREATE_RECORD = "create_record"
    AWARD_POINTS = "award_points"


class ConditionOperator(_ValuesMixin, str, Enum):
    """Operators understood by the condition evaluator."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"


class LogicOperator(_ValuesMixin, str, Enum):
    """How a rule combines its per-condition results."""

    AND = "AND"
    OR = "OR"


class MemberRole(_ValuesMixin, str, Enum):
    """Member roles relevant to notification administration."""

    MEMBER = "MEMBER"
    BOARD = "BOARD"
    ADMIN = "ADMIN"
