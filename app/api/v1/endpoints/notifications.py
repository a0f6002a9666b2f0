"""Notification API: send, bulk send, mark read, and reminder jobs."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import get_current_user, get_notification_service
from app.application.dtos.identity import CurrentUser
from app.application.dtos.notification import NotificationCreate
from app.application.use_cases.notifications import NotificationService
from app.core.limiter import limit_writes
from app.schemas.notification import (
    NotificationBulkRequest,
    NotificationBulkResponse,
    NotificationCreateRequest,
    NotificationSentResponse,
    ReminderRunResponse,
)

router = APIRouter()


@router.post("", response_model=NotificationSentResponse, status_code=201)
@limit_writes
async def send_notification(
    request: Request,
    body: NotificationCreateRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    notification_id = await service.send(
        NotificationCreate(
            member_id=body.member_id,
            type=body.type,
            title=body.title,
            message=body.message,
            data=body.data,
        )
    )
    return NotificationSentResponse(id=notification_id)


@router.post("/bulk", response_model=NotificationBulkResponse, status_code=201)
@limit_writes
async def send_bulk_notifications(
    request: Request,
    body: NotificationBulkRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Send one notification per member in a single batch (board/admin only)."""
    ids = await service.send_bulk(
        user.uid, body.member_ids, body.type, body.title, body.message, body.data
    )
    return NotificationBulkResponse(sent=len(ids), ids=ids)


@router.post("/reminders/dues", response_model=ReminderRunResponse)
async def run_dues_reminders(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Dues renewal reminders; intended for an external scheduler (board/admin only)."""
    return ReminderRunResponse.model_validate(await service.send_dues_reminders(user.uid))


@router.post("/reminders/events", response_model=ReminderRunResponse)
async def run_event_reminders(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Reminders for events starting in 24 to 48 hours (board/admin only)."""
    return ReminderRunResponse.model_validate(await service.send_event_reminders(user.uid))


@router.post("/{notification_id}/read", status_code=204)
@limit_writes
async def mark_notification_read(
    request: Request,
    notification_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
):
    """Mark as read; someone else's notification requires board/admin."""
    await service.mark_read(user.uid, notification_id)
    return Response(status_code=204)
