"""Tests for NotificationService (sends, read receipts, reminder jobs)."""

from datetime import datetime, timedelta, timezone

import pytest

from app.application.dtos.notification import NotificationCreate
from app.application.use_cases.notifications import NotificationService
from app.core.constants import (
    COLLECTION_DUES_TRANSACTIONS,
    COLLECTION_EVENTS,
    COLLECTION_MEMBERS,
    COLLECTION_NOTIFICATIONS,
)
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException
from app.infrastructure.memory import InMemoryDocumentStore
from app.infrastructure.repositories import MemberRepository

NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
async def service(store: InMemoryDocumentStore) -> NotificationService:
    await store.create(COLLECTION_MEMBERS, {"role": "BOARD"}, document_id="board-1")
    await store.create(COLLECTION_MEMBERS, {"role": "MEMBER"}, document_id="member-1")
    return NotificationService(store, MemberRepository(store))


async def test_send_creates_unread_notification(service: NotificationService, store: InMemoryDocumentStore) -> None:
    notification_id = await service.send(
        NotificationCreate(member_id="member-1", type="general", title="Hi", message="Welcome")
    )
    doc = (await store.get(COLLECTION_NOTIFICATIONS, notification_id)).data
    assert doc["member_id"] == "member-1"
    assert doc["read"] is False
    assert isinstance(doc["created_at"], datetime)


async def test_bulk_send_requires_board_or_admin(service: NotificationService) -> None:
    with pytest.raises(AuthorizationException):
        await service.send_bulk("member-1", ["a", "b"], "general", "T", "M")
    with pytest.raises(AuthorizationException):
        await service.send_bulk("unknown", ["a"], "general", "T", "M")


async def test_bulk_send_creates_one_per_member(service: NotificationService, store: InMemoryDocumentStore) -> None:
    ids = await service.send_bulk("board-1", ["a", "b", "c"], "general", "Meeting", "Tonight")
    assert len(ids) == 3
    members = {d["member_id"] for d in store.dump(COLLECTION_NOTIFICATIONS).values()}
    assert members == {"a", "b", "c"}


async def test_mark_read_by_owner(service: NotificationService, store: InMemoryDocumentStore) -> None:
    notification_id = await service.send(NotificationCreate("member-1", "general", "T", "M"))
    await service.mark_read("member-1", notification_id)
    doc = (await store.get(COLLECTION_NOTIFICATIONS, notification_id)).data
    assert doc["read"] is True
    assert "read_at" in doc


async def test_mark_read_of_someone_else_needs_board(service: NotificationService) -> None:
    notification_id = await service.send(NotificationCreate("other", "general", "T", "M"))
    with pytest.raises(AuthorizationException):
        await service.mark_read("member-1", notification_id)
    await service.mark_read("board-1", notification_id)


async def test_mark_read_missing_notification(service: NotificationService) -> None:
    with pytest.raises(ResourceNotFoundException):
        await service.mark_read("member-1", "nope")


async def test_dues_reminders_skip_senators_and_far_dates(
    service: NotificationService, store: InMemoryDocumentStore
) -> None:
    def dues(member: str, days: int, membership: str = "regular", status: str = "pending") -> dict:
        return {
            "member_id": member,
            "status": status,
            "due_date": NOW + timedelta(days=days),
            "amount": 50,
            "dues_year": 2025,
            "membership_type": membership,
        }

    await store.create(COLLECTION_DUES_TRANSACTIONS, dues("m-soon", 3), document_id="t1")
    await store.create(COLLECTION_DUES_TRANSACTIONS, dues("m-senator", 3, "senator"), document_id="t2")
    await store.create(COLLECTION_DUES_TRANSACTIONS, dues("m-later", 30), document_id="t3")
    await store.create(COLLECTION_DUES_TRANSACTIONS, dues("m-paid", 1, status="paid"), document_id="t4")

    result = await service.send_dues_reminders("board-1", now=NOW)

    assert result.job == "dues_reminders"
    assert result.sent == 1
    doc = (await store.get(COLLECTION_NOTIFICATIONS, result.notification_ids[0])).data
    assert doc["member_id"] == "m-soon"
    assert doc["type"] == "dues_reminder"
    assert "RM50" in doc["message"]
    assert doc["data"]["dues_transaction_id"] == "t1"


async def test_dues_reminders_require_board(service: NotificationService) -> None:
    with pytest.raises(AuthorizationException):
        await service.send_dues_reminders("member-1", now=NOW)


async def test_event_reminders_notify_each_attendee_in_window(
    service: NotificationService, store: InMemoryDocumentStore
) -> None:
    await store.create(
        COLLECTION_EVENTS,
        {"title": "Gala", "start_date": NOW + timedelta(hours=30), "attendees": ["a", "b"]},
        document_id="e1",
    )
    await store.create(
        COLLECTION_EVENTS,
        {"title": "Too soon", "start_date": NOW + timedelta(hours=5), "attendees": ["c"]},
        document_id="e2",
    )
    await store.create(
        COLLECTION_EVENTS,
        {"title": "No list", "start_date": NOW + timedelta(hours=36)},
        document_id="e3",
    )

    result = await service.send_event_reminders("board-1", now=NOW)

    assert result.sent == 2
    docs = store.dump(COLLECTION_NOTIFICATIONS).values()
    assert {d["member_id"] for d in docs} == {"a", "b"}
    assert all('"Gala"' in d["message"] and "15:00 UTC" in d["message"] for d in docs)
