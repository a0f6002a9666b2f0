"""Application DTOs (frozen dataclasses passed between layers)."""

from app.application.dtos.change import ChangeEvent
from app.application.dtos.identity import CurrentUser
from app.application.dtos.notification import NotificationCreate, ReminderRunResult
from app.application.dtos.points import AppliedPointsRule, PointsScoreResult
from app.application.dtos.rule import ConditionResult, RuleEvaluationReport, RuleMatch
from app.application.dtos.store import QueryFilter, StoredDocument
from app.application.dtos.workflow import (
    ValidationIssue,
    WorkflowExecutionResult,
    WorkflowRunResult,
    WorkflowValidationReport,
)

__all__ = [
    "AppliedPointsRule",
    "ChangeEvent",
    "ConditionResult",
    "CurrentUser",
    "NotificationCreate",
    "PointsScoreResult",
    "QueryFilter",
    "ReminderRunResult",
    "RuleEvaluationReport",
    "RuleMatch",
    "StoredDocument",
    "ValidationIssue",
    "WorkflowExecutionResult",
    "WorkflowRunResult",
    "WorkflowValidationReport",
]
