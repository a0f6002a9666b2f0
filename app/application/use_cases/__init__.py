"""Application use cases: one entry point per operation."""

from app.application.use_cases.automation import (
    PointsRuleEngine,
    RuleEngine,
    WorkflowEngine,
    match_rule,
)
from app.application.use_cases.notifications import NotificationService

__all__ = [
    "NotificationService",
    "PointsRuleEngine",
    "RuleEngine",
    "WorkflowEngine",
    "match_rule",
]
