"""Automation rule API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.dtos.rule import RuleMatch
from app.domain.entities.rule import RuleEntity
from app.domain.enums import ConditionOperator, LogicOperator
from app.domain.exceptions import ActionException
from app.domain.value_objects.actions import parse_action_spec


class RuleCondition(BaseModel):
    field: str = Field(..., min_length=1, max_length=512)
    operator: ConditionOperator
    value: Any = None


def _check_actions(actions: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for index, action in enumerate(actions):
        try:
            parse_action_spec(action)
        except ActionException as exc:
            raise ValueError(f"actions[{index}]: {exc.message}") from exc
    return actions


class RuleCreateRequest(BaseModel):
    """Request body for creating a rule.

    trigger is the collection the rule watches; null or "*" watches every
    collection.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    enabled: bool = True
    trigger: str | None = Field(default=None, max_length=256)
    conditions: list[RuleCondition] = Field(default_factory=list)
    logic_operator: LogicOperator = Field(default=LogicOperator.AND, alias="logicOperator")
    actions: list[dict[str, Any]] = Field(..., min_length=1)

    @field_validator("actions")
    @classmethod
    def _validate_actions(cls, v: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return _check_actions(v)


class RuleUpdate(BaseModel):
    """Request body for updating a rule (partial)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    enabled: bool | None = None
    trigger: str | None = Field(default=None, max_length=256)
    conditions: list[RuleCondition] | None = None
    logic_operator: LogicOperator | None = Field(default=None, alias="logicOperator")
    actions: list[dict[str, Any]] | None = Field(default=None, min_length=1)

    @field_validator("actions")
    @classmethod
    def _validate_actions(cls, v: list[dict[str, Any]] | None) -> list[dict[str, Any]] | None:
        return _check_actions(v) if v is not None else v


class RuleResponse(BaseModel):
    """Rule response."""

    id: str
    name: str
    description: str | None
    enabled: bool
    trigger: str | None
    conditions: list[dict[str, Any]]
    logic_operator: str | None
    actions: list[dict[str, Any]]

    @classmethod
    def from_entity(cls, rule: RuleEntity) -> "RuleResponse":
        return cls(
            id=rule.id,
            name=rule.name,
            description=rule.description,
            enabled=rule.enabled,
            trigger=rule.trigger,
            conditions=[c.to_dict() for c in rule.conditions],
            logic_operator=None if rule.logic_operator is None else str(rule.logic_operator),
            actions=rule.actions,
        )


class RuleTestRequest(BaseModel):
    """Sample document to dry-run a rule's conditions against."""

    document: dict[str, Any] = Field(default_factory=dict)


class RuleTestResponse(BaseModel):
    """Per-condition results and the combined outcome; no actions are run."""

    rule_id: str
    matched: bool
    logic_operator: str | None
    conditions: list[dict[str, Any]]

    @classmethod
    def from_match(cls, match: RuleMatch, logic_operator: str | None) -> "RuleTestResponse":
        return cls(
            rule_id=match.rule_id,
            matched=match.matched,
            logic_operator=logic_operator,
            conditions=[c.to_dict() for c in match.conditions],
        )
