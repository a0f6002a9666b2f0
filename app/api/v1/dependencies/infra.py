"""Infrastructure handles created by the lifespan (composition root)."""

from __future__ import annotations

from fastapi import Request

from app.application.interfaces.services import (
    IChangeSubscription,
    IEmailSender,
    IMessageRenderer,
)
from app.application.interfaces.store import IDocumentStore
from app.domain.exceptions import OrgException


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise OrgException(
            f"{name} is not initialized",
            error_code="STORE_UNAVAILABLE",
        )
    return value


def get_document_store(request: Request) -> IDocumentStore:
    """Document store selected by DATABASE_BACKEND."""
    return _state(request, "store")


def get_change_feed(request: Request) -> IChangeSubscription:
    """In-process change feed the rule engine is subscribed to."""
    return _state(request, "change_feed")


def get_email_sender(request: Request) -> IEmailSender:
    return _state(request, "email_sender")


def get_message_renderer(request: Request) -> IMessageRenderer | None:
    return getattr(request.app.state, "message_renderer", None)
