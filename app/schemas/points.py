"""Points scoring API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.points import PointsScoreResult
from app.domain.entities.points_rule import PointsRuleEntity
from app.schemas.rule import RuleCondition


class PointsScoreRequest(BaseModel):
    """Activity to score for a member."""

    model_config = ConfigDict(populate_by_name=True)

    member_id: str = Field(..., min_length=1, alias="memberId")
    trigger: str = Field(..., min_length=1, max_length=128)
    activity_data: dict[str, Any] = Field(default_factory=dict, alias="activityData")


class PointsScoreResponse(BaseModel):
    total_points: float
    applied_rules: list[dict[str, Any]]

    @classmethod
    def from_result(cls, result: PointsScoreResult) -> "PointsScoreResponse":
        return cls(
            total_points=result.total_points,
            applied_rules=[r.to_dict() for r in result.applied_rules],
        )


class PointsRuleCreateRequest(BaseModel):
    """Request body for creating a points rule. Conditions are AND-combined."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    enabled: bool = True
    trigger: str = Field(..., min_length=1, max_length=128)
    conditions: list[RuleCondition] = Field(default_factory=list)
    point_value: float = Field(..., alias="pointValue")
    multiplier: float = 1
    weight: float = 1


class PointsRuleResponse(BaseModel):
    id: str
    name: str
    enabled: bool
    trigger: str
    conditions: list[dict[str, Any]]
    point_value: Any
    multiplier: Any
    weight: Any

    @classmethod
    def from_entity(cls, rule: PointsRuleEntity) -> "PointsRuleResponse":
        return cls(
            id=rule.id,
            name=rule.name,
            enabled=rule.enabled,
            trigger=rule.trigger,
            conditions=[c.to_dict() for c in rule.conditions],
            point_value=rule.point_value,
            multiplier=rule.multiplier,
            weight=rule.weight,
        )
