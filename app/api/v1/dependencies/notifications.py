"""Notification dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.api.v1.dependencies.infra import get_document_store
from app.application.interfaces.store import IDocumentStore
from app.application.use_cases.notifications import NotificationService
from app.infrastructure.repositories import MemberRepository


async def get_notification_service(
    store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> NotificationService:
    """Notification service with member-role authorization."""
    return NotificationService(store, MemberRepository(store))
