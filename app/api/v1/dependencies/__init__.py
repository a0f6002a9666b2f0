"""Presentation-layer dependency injection (composition root).

Routes depend only on the factories re-exported here; every engine and
repository is built from the infrastructure parked on app.state by the
lifespan. Tests replace get_document_store / get_change_feed /
get_email_sender through app.dependency_overrides.
"""

from app.api.v1.dependencies.auth import get_current_user
from app.api.v1.dependencies.automation import (
    get_action_dispatcher,
    get_points_engine,
    get_points_rule_repo,
    get_rule_repo,
    get_workflow_engine,
    get_workflow_execution_repo,
    get_workflow_repo,
)
from app.api.v1.dependencies.infra import (
    get_change_feed,
    get_document_store,
    get_email_sender,
    get_message_renderer,
)
from app.api.v1.dependencies.notifications import get_notification_service

__all__ = [
    "get_action_dispatcher",
    "get_change_feed",
    "get_current_user",
    "get_document_store",
    "get_email_sender",
    "get_message_renderer",
    "get_notification_service",
    "get_points_engine",
    "get_points_rule_repo",
    "get_rule_repo",
    "get_workflow_engine",
    "get_workflow_execution_repo",
    "get_workflow_repo",
]
