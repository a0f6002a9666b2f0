"""Domain entities."""

from app.domain.entities.points_rule import PointsRuleEntity
from app.domain.entities.rule import ConditionSpec, RuleEntity
from app.domain.entities.workflow import StepSpec, WorkflowEntity

__all__ = [
    "ConditionSpec",
    "PointsRuleEntity",
    "RuleEntity",
    "StepSpec",
    "WorkflowEntity",
]
