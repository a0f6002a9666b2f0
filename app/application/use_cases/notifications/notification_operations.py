"""Member notifications: direct sends, read receipts, and scheduled reminders.

The reminder jobs are plain use cases; an external scheduler (cron, Cloud
Scheduler) calls them through the API.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.application.dtos.notification import NotificationCreate, ReminderRunResult
from app.application.dtos.store import QueryFilter
from app.application.interfaces.store import SERVER_TIMESTAMP
from app.core.constants import (
    COLLECTION_DUES_TRANSACTIONS,
    COLLECTION_EVENTS,
    COLLECTION_NOTIFICATIONS,
)
from app.domain.enums import MemberRole
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException
from app.shared.enums import NotificationType
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import coerce_datetime, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IMemberRepository
    from app.application.interfaces.store import IDocumentStore

logger = get_logger(__name__)

_ADMIN_ROLES = frozenset({MemberRole.BOARD.value, MemberRole.ADMIN.value})
DUES_REMINDER_WINDOW = timedelta(days=7)
EVENT_REMINDER_FROM = timedelta(hours=24)
EVENT_REMINDER_UNTIL = timedelta(hours=48)
# Senators are exempt from dues.
DUES_EXEMPT_MEMBERSHIP = "senator"


def _notification_doc(n: NotificationCreate) -> dict[str, Any]:
    return {
        "member_id": n.member_id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "data": dict(n.data),
        "read": False,
        "created_at": SERVER_TIMESTAMP,
    }


class NotificationService:
    """Creates notification documents and enforces who may send or mark them."""

    def __init__(self, store: IDocumentStore, member_repo: IMemberRepository) -> None:
        self._store = store
        self._member_repo = member_repo

    async def _require_board_or_admin(self, uid: str, action: str) -> None:
        role = await self._member_repo.get_role(uid)
        if role not in _ADMIN_ROLES:
            raise AuthorizationException(resource="notification", action=action)

    async def send(self, notification: NotificationCreate) -> str:
        """Create one notification; return its id."""
        notification_id = await self._store.create(
            COLLECTION_NOTIFICATIONS, _notification_doc(notification)
        )
        logger.info("Notification %s sent to member %s", notification_id, notification.member_id)
        return notification_id

    async def send_bulk(
        self,
        caller_uid: str,
        member_ids: list[str],
        notification_type: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> list[str]:
        """Create one notification per member in a single batch (board/admin only)."""
        await self._require_board_or_admin(caller_uid, "bulk_send")
        docs = [
            _notification_doc(NotificationCreate(member_id, notification_type, title, message, data or {}))
            for member_id in member_ids
        ]
        ids = await self._store.create_many(COLLECTION_NOTIFICATIONS, docs) if docs else []
        logger.info("Bulk notifications sent to %d members: %s", len(ids), title)
        return ids

    async def mark_read(self, caller_uid: str, notification_id: str) -> None:
        """Mark a notification read; others' notifications require board/admin."""
        doc = await self._store.get(COLLECTION_NOTIFICATIONS, notification_id)
        if doc is None:
            raise ResourceNotFoundException("notification", notification_id)
        if doc.data.get("member_id") != caller_uid:
            await self._require_board_or_admin(caller_uid, "mark_read")
        await self._store.update(
            COLLECTION_NOTIFICATIONS,
            notification_id,
            {"read": True, "read_at": SERVER_TIMESTAMP},
        )

    async def send_dues_reminders(
        self, caller_uid: str, now: datetime | None = None
    ) -> ReminderRunResult:
        """Remind members whose pending dues fall due within the next 7 days."""
        await self._require_board_or_admin(caller_uid, "dues_reminders")
        cutoff = (now or utc_now()) + DUES_REMINDER_WINDOW
        pending = await self._store.query(
            COLLECTION_DUES_TRANSACTIONS,
            [
                QueryFilter("status", "==", "pending"),
                QueryFilter("due_date", "<=", cutoff),
            ],
        )
        docs: list[dict[str, Any]] = []
        for dues in pending:
            d = dues.data
            if d.get("membership_type") == DUES_EXEMPT_MEMBERSHIP:
                continue
            docs.append(
                _notification_doc(
                    NotificationCreate(
                        member_id=d.get("member_id", ""),
                        type=NotificationType.DUES_REMINDER.value,
                        title="Dues Payment Reminder",
                        message=(
                            f"Your {d.get('dues_year')} membership dues of RM{d.get('amount')} are due soon. "
                            "Please make your payment to maintain your membership status."
                        ),
                        data={
                            "dues_transaction_id": dues.id,
                            "amount": d.get("amount"),
                            "dues_year": d.get("dues_year"),
                            "membership_type": d.get("membership_type"),
                        },
                    )
                )
            )
        ids = await self._store.create_many(COLLECTION_NOTIFICATIONS, docs) if docs else []
        logger.info("Sent %d dues renewal reminders", len(ids))
        return ReminderRunResult(job="dues_reminders", sent=len(ids), notification_ids=ids)

    async def send_event_reminders(
        self, caller_uid: str, now: datetime | None = None
    ) -> ReminderRunResult:
        """Remind each attendee of events starting between 24h and 48h from now."""
        await self._require_board_or_admin(caller_uid, "event_reminders")
        current = now or utc_now()
        upcoming = await self._store.query(
            COLLECTION_EVENTS,
            [
                QueryFilter("start_date", ">=", current + EVENT_REMINDER_FROM),
                QueryFilter("start_date", "<", current + EVENT_REMINDER_UNTIL),
            ],
        )
        docs: list[dict[str, Any]] = []
        for event in upcoming:
            e = event.data
            attendees = e.get("attendees")
            if not isinstance(attendees, list):
                continue
            start = coerce_datetime(e.get("start_date"))
            at = start.strftime("%H:%M UTC") if start else "the scheduled time"
            for attendee_id in attendees:
                docs.append(
                    _notification_doc(
                        NotificationCreate(
                            member_id=attendee_id,
                            type=NotificationType.EVENT_REMINDER.value,
                            title="Event Reminder",
                            message=f'Don\'t forget about "{e.get("title")}" tomorrow at {at}.',
                            data={
                                "event_id": event.id,
                                "event_title": e.get("title"),
                                "start_date": start,
                                "location": e.get("location"),
                            },
                        )
                    )
                )
        ids = await self._store.create_many(COLLECTION_NOTIFICATIONS, docs) if docs else []
        logger.info("Sent %d event reminders", len(ids))
        return ReminderRunResult(job="event_reminders", sent=len(ids), notification_ids=ids)
