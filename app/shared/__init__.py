"""Shared utilities: request context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestContext,
    bind_request_context,
    get_request_context,
    reset_request_context,
)
from app.shared.enums import (
    ActionOutcome,
    NotificationType,
    StepStatus,
    WorkflowExecutionStatus,
)
from app.shared.utils import coerce_datetime, ensure_utc, generate_cuid, utc_now

__all__ = [
    "ActionOutcome",
    "NotificationType",
    "RequestContext",
    "StepStatus",
    "WorkflowExecutionStatus",
    "bind_request_context",
    "coerce_datetime",
    "ensure_utc",
    "generate_cuid",
    "get_request_context",
    "reset_request_context",
    "utc_now",
]
