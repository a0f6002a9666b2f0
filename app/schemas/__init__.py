"""Pydantic request/response schemas for the API."""

from app.schemas.change import ChangeAckResponse, ChangeNotificationRequest
from app.schemas.health import HealthResponse
from app.schemas.notification import (
    NotificationBulkRequest,
    NotificationCreateRequest,
    ReminderRunResponse,
)
from app.schemas.points import PointsRuleCreateRequest, PointsRuleResponse, PointsScoreRequest
from app.schemas.rule import RuleCreateRequest, RuleResponse, RuleTestRequest
from app.schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowExecuteRequest,
    WorkflowResponse,
    WorkflowRunResponse,
)

__all__ = [
    "ChangeAckResponse",
    "ChangeNotificationRequest",
    "HealthResponse",
    "NotificationBulkRequest",
    "NotificationCreateRequest",
    "PointsRuleCreateRequest",
    "PointsRuleResponse",
    "PointsScoreRequest",
    "ReminderRunResponse",
    "RuleCreateRequest",
    "RuleResponse",
    "RuleTestRequest",
    "WorkflowCreateRequest",
    "WorkflowExecuteRequest",
    "WorkflowResponse",
    "WorkflowRunResponse",
]
