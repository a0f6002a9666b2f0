"""Workflow, rule and points dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.infra import (
    get_document_store,
    get_email_sender,
    get_message_renderer,
)
from app.application.interfaces.services import IEmailSender, IMessageRenderer
from app.application.interfaces.store import IDocumentStore
from app.application.services.action_dispatcher import ActionDispatcher
from app.application.use_cases.automation import PointsRuleEngine, WorkflowEngine
from app.core.config import get_settings
from app.infrastructure.repositories import (
    PointsRuleRepository,
    RuleRepository,
    WorkflowExecutionRepository,
    WorkflowRepository,
)


async def get_workflow_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> WorkflowRepository:
    return WorkflowRepository(store)


async def get_workflow_execution_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> WorkflowExecutionRepository:
    """Read side of workflow_executions (list by workflow, get by id)."""
    return WorkflowExecutionRepository(store)


async def get_rule_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> RuleRepository:
    return RuleRepository(store)


async def get_points_rule_repo(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> PointsRuleRepository:
    return PointsRuleRepository(store)


async def get_action_dispatcher(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    email_sender: Annotated[IEmailSender, Depends(get_email_sender)],
    renderer: Annotated[IMessageRenderer | None, Depends(get_message_renderer)],
) -> ActionDispatcher:
    """Action dispatcher shared by the workflow and points engines."""
    return ActionDispatcher(store, email_sender, renderer)


async def get_workflow_engine(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
    dispatcher: Annotated[ActionDispatcher, Depends(get_action_dispatcher)],
) -> WorkflowEngine:
    return WorkflowEngine(
        store,
        dispatcher,
        default_delay_ms=get_settings().workflow_default_delay_ms,
    )


async def get_points_engine(
    rule_repo: Annotated[PointsRuleRepository, Depends(get_points_rule_repo)],
    dispatcher: Annotated[ActionDispatcher, Depends(get_action_dispatcher)],
) -> PointsRuleEngine:
    return PointsRuleEngine(rule_repo, dispatcher)
