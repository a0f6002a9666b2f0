"""Tests for the document change webhook (signature, validation, rule firing)."""

import hashlib
import hmac
import json
import os

import pytest
from httpx import AsyncClient

from app.core.config import get_settings
from app.core.constants import COLLECTION_AUTOMATION_RULES, COLLECTION_MEMBERS, COLLECTION_RULE_EXECUTIONS
from app.infrastructure.memory import InMemoryDocumentStore

_SECRET = "test-change-secret"


@pytest.fixture
def webhook_secret():
    prev = os.environ.get("CHANGE_WEBHOOK_SECRET")
    os.environ["CHANGE_WEBHOOK_SECRET"] = _SECRET
    get_settings.cache_clear()
    try:
        yield _SECRET
    finally:
        if prev is not None:
            os.environ["CHANGE_WEBHOOK_SECRET"] = prev
        else:
            os.environ.pop("CHANGE_WEBHOOK_SECRET", None)
        get_settings.cache_clear()


def _signed(payload: dict) -> tuple[bytes, dict[str, str]]:
    body = json.dumps(payload).encode()
    signature = hmac.new(_SECRET.encode(), body, hashlib.sha256).hexdigest()
    return body, {"Content-Type": "application/json", "X-Webhook-Signature-256": f"sha256={signature}"}


async def test_webhook_when_secret_not_configured_returns_503(client: AsyncClient) -> None:
    prev = os.environ.pop("CHANGE_WEBHOOK_SECRET", None)
    get_settings.cache_clear()
    try:
        response = await client.post("/api/v1/changes", json={"collection": "members"})
        assert response.status_code == 503
        assert "not configured" in response.json()["message"].lower()
    finally:
        if prev is not None:
            os.environ["CHANGE_WEBHOOK_SECRET"] = prev
        get_settings.cache_clear()


async def test_webhook_with_wrong_signature_returns_401(client: AsyncClient, webhook_secret: str) -> None:
    response = await client.post(
        "/api/v1/changes",
        json={"collection": "members", "documentId": "m1", "after": {}},
        headers={"X-Webhook-Signature-256": "sha256=wrong"},
    )
    assert response.status_code == 401
    assert "signature" in response.json()["message"].lower()


async def test_signed_but_malformed_body_returns_422(client: AsyncClient, webhook_secret: str) -> None:
    body, headers = _signed({"documentId": "m1"})
    response = await client.post("/api/v1/changes", content=body, headers=headers)
    assert response.status_code == 422


async def test_signed_change_fires_matching_rule(
    client: AsyncClient, webhook_secret: str, store: InMemoryDocumentStore
) -> None:
    await store.create(
        COLLECTION_AUTOMATION_RULES,
        {
            "name": "Activate",
            "enabled": True,
            "trigger": "members",
            "conditions": [{"field": "status", "operator": "equals", "value": "new"}],
            "logic_operator": "AND",
            "actions": [
                {"type": "update_field", "collection": "members", "documentId": "m1", "field": "welcomed", "value": True}
            ],
        },
        document_id="r1",
    )
    await store.create(COLLECTION_MEMBERS, {"status": "new"}, document_id="m1")

    body, headers = _signed(
        {"collection": "members", "documentId": "m1", "after": {"status": "new"}, "eventId": "ev-42"}
    )
    response = await client.post("/api/v1/changes", content=body, headers=headers)

    assert response.status_code == 202
    assert response.json() == {"accepted": True, "event_id": "ev-42"}
    assert (await store.get(COLLECTION_MEMBERS, "m1")).data["welcomed"] is True
    records = list(store.dump(COLLECTION_RULE_EXECUTIONS).values())
    assert len(records) == 1
    assert records[0]["rule_id"] == "r1"
    assert records[0]["event_id"] == "ev-42"


async def test_event_id_is_generated_when_absent(client: AsyncClient, webhook_secret: str) -> None:
    body, headers = _signed({"collection": "members", "documentId": "m9", "after": None})
    response = await client.post("/api/v1/changes", content=body, headers=headers)
    assert response.status_code == 202
    assert response.json()["event_id"]
