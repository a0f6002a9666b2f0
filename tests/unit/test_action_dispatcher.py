"""Tests for ActionDispatcher against the in-memory store."""

import pytest

from app.application.services.action_dispatcher import ActionDispatcher
from app.core.constants import COLLECTION_POINTS, DEFAULT_POINTS_REASON
from app.domain.exceptions import ActionConfigurationException, UnknownActionTypeException
from app.infrastructure.memory import InMemoryDocumentStore
from app.infrastructure.services import JinjaMessageRenderer


class _FailingSender:
    async def send(self, to_emails: list[str], subject: str, body: str) -> None:
        raise ConnectionError("smtp down")


async def test_update_field_writes_value_and_timestamp(
    store: InMemoryDocumentStore, dispatcher: ActionDispatcher
) -> None:
    await store.create("members", {"status": "pending"}, document_id="m1")
    result = await dispatcher.execute(
        {"type": "update_field", "collection": "members", "documentId": "m1", "field": "status", "value": "active"}
    )
    assert result == {"field_updated": True}
    doc = await store.get("members", "m1")
    assert doc.data["status"] == "active"
    assert doc.data["updated_at"] is not None


async def test_update_field_without_document_id_fails_without_writing(
    store: InMemoryDocumentStore, dispatcher: ActionDispatcher
) -> None:
    await store.create("members", {"status": "pending"}, document_id="m1")
    with pytest.raises(ActionConfigurationException) as exc_info:
        await dispatcher.execute(
            {"type": "update_field", "collection": "members", "field": "status", "value": "x"}
        )
    assert exc_info.value.message == "invalid configuration"
    doc = await store.get("members", "m1")
    assert doc.data == {"status": "pending"}


async def test_create_record_returns_new_id(
    store: InMemoryDocumentStore, dispatcher: ActionDispatcher
) -> None:
    result = await dispatcher.execute(
        {"type": "create_record", "collection": "tasks", "data": {"title": "Follow up"}}
    )
    assert result["record_created"] is True
    doc = await store.get("tasks", result["document_id"])
    assert doc.data["title"] == "Follow up"
    assert "created_at" in doc.data


async def test_create_record_requires_data(dispatcher: ActionDispatcher) -> None:
    with pytest.raises(ActionConfigurationException):
        await dispatcher.execute({"type": "create_record", "collection": "tasks"})


async def test_award_points_defaults_reason(
    store: InMemoryDocumentStore, dispatcher: ActionDispatcher
) -> None:
    result = await dispatcher.execute({"type": "award_points", "memberId": "m1", "points": 15})
    assert result == {"points_awarded": True, "points": 15}
    records = list(store.dump(COLLECTION_POINTS).values())
    assert len(records) == 1
    assert records[0]["member_id"] == "m1"
    assert records[0]["reason"] == DEFAULT_POINTS_REASON == "Workflow action"


async def test_award_points_rejects_non_numeric_points(dispatcher: ActionDispatcher) -> None:
    with pytest.raises(ActionConfigurationException):
        await dispatcher.execute({"type": "award_points", "memberId": "m1", "points": "ten"})


async def test_unknown_action_type(dispatcher: ActionDispatcher) -> None:
    with pytest.raises(UnknownActionTypeException):
        await dispatcher.execute({"type": "send_sms", "to": "123"})


async def test_send_email_renders_templates(store: InMemoryDocumentStore, email_sender) -> None:
    dispatcher = ActionDispatcher(store, email_sender, JinjaMessageRenderer())
    result = await dispatcher.execute(
        {"type": "send_email", "to": "a@example.com", "subject": "Hi {{ name }}", "body": "Welcome"},
        {"name": "Aisha"},
    )
    assert result == {"email_sent": True, "to": "a@example.com"}
    assert email_sender.sent == [{"to": ["a@example.com"], "subject": "Hi Aisha", "body": "Welcome"}]


async def test_send_email_delivery_failure_does_not_fail_action(store: InMemoryDocumentStore) -> None:
    dispatcher = ActionDispatcher(store, _FailingSender())
    result = await dispatcher.execute({"type": "send_email", "to": ["a@example.com"], "subject": "s"})
    assert result["email_sent"] is True
