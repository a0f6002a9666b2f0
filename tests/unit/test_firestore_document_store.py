"""Tests for the Firestore REST adapter using httpx.MockTransport."""

import json
from datetime import datetime, timezone
from types import SimpleNamespace

import httpx
import pytest

from app.application.dtos.store import QueryFilter
from app.application.interfaces.store import SERVER_TIMESTAMP
from app.domain.exceptions import DocumentNotFoundError
from app.infrastructure.exceptions import DocumentExistsError, DocumentStoreError
from app.infrastructure.firebase import FirestoreDocumentStore
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
    encode_value,
    field_path,
)

_ROOT = "projects/demo/databases/(default)/documents"


def _store(handler) -> tuple[FirestoreDocumentStore, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    credentials = SimpleNamespace(valid=True, token="t")
    client = FirestoreRESTClient("demo", credentials, http_client=http)
    return FirestoreDocumentStore(client), requests


def test_encode_value_types() -> None:
    ts = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert encode_value(7) == {"integerValue": "7"}
    assert encode_value(True) == {"booleanValue": True}
    assert encode_value(ts) == {"timestampValue": "2025-03-01T12:00:00.000000Z"}
    assert encode_value({"a": [1, None]}) == {
        "mapValue": {"fields": {"a": {"arrayValue": {"values": [{"integerValue": "1"}, {"nullValue": None}]}}}}
    }


def test_decode_fields_restores_python_values() -> None:
    fields = {
        "points": {"integerValue": "10"},
        "at": {"timestampValue": "2025-03-01T12:00:00Z"},
        "tags": {"arrayValue": {}},
    }
    assert decode_fields(fields) == {
        "points": 10,
        "at": datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc),
        "tags": [],
    }


def test_server_timestamp_becomes_transform() -> None:
    fields, transforms = encode_fields({"name": "x", "created-at": SERVER_TIMESTAMP})
    assert fields == {"name": {"stringValue": "x"}}
    assert transforms == [{"fieldPath": "`created-at`", "setToServerValue": "REQUEST_TIME"}]
    assert field_path("created_at") == "created_at"


def test_nested_server_timestamp_is_rejected() -> None:
    with pytest.raises(TypeError):
        encode_value({"when": SERVER_TIMESTAMP})


async def test_create_commits_with_exists_false_precondition() -> None:
    store, requests = _store(lambda r: httpx.Response(200, json={"writeResults": [{}]}))
    doc_id = await store.create("members", {"name": "Ada", "created_at": SERVER_TIMESTAMP}, document_id="m1")

    assert doc_id == "m1"
    request = requests[0]
    assert request.url.path.endswith("/documents:commit")
    assert request.headers["Authorization"] == "Bearer t"
    write = json.loads(request.content)["writes"][0]
    assert write["update"]["name"] == f"{_ROOT}/members/m1"
    assert write["currentDocument"] == {"exists": False}
    assert write["updateTransforms"][0]["fieldPath"] == "created_at"


async def test_create_conflict_raises_document_exists() -> None:
    store, _ = _store(lambda r: httpx.Response(409, json={"error": {"message": "ALREADY_EXISTS"}}))
    with pytest.raises(DocumentExistsError):
        await store.create("members", {}, document_id="m1")


async def test_update_missing_raises_not_found() -> None:
    store, requests = _store(lambda r: httpx.Response(404, json={"error": {"message": "NOT_FOUND"}}))
    with pytest.raises(DocumentNotFoundError):
        await store.update("members", "ghost", {"status": "active"})
    write = json.loads(requests[0].content)["writes"][0]
    assert write["updateMask"] == {"fieldPaths": ["status"]}
    assert write["currentDocument"] == {"exists": True}


async def test_get_returns_none_on_404_and_decodes_document() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/m1"):
            return httpx.Response(
                200, json={"name": f"{_ROOT}/members/m1", "fields": {"name": {"stringValue": "Ada"}}}
            )
        return httpx.Response(404, json={})

    store, _ = _store(handler)
    doc = await store.get("members", "m1")
    assert doc is not None and doc.id == "m1" and doc.data == {"name": "Ada"}
    assert await store.get("members", "m2") is None


async def test_query_builds_structured_query() -> None:
    store, requests = _store(
        lambda r: httpx.Response(
            200,
            json=[
                {"document": {"name": f"{_ROOT}/dues/d1", "fields": {"status": {"stringValue": "pending"}}}},
                {"readTime": "2025-01-01T00:00:00Z"},
            ],
        )
    )
    docs = await store.query(
        "dues",
        [QueryFilter("status", "==", "pending"), QueryFilter("amount", ">", 0)],
        order_by="due_date",
        limit=5,
    )

    assert [d.id for d in docs] == ["d1"]
    query = json.loads(requests[0].content)["structuredQuery"]
    assert query["from"] == [{"collectionId": "dues"}]
    assert query["where"]["compositeFilter"]["op"] == "AND"
    assert len(query["where"]["compositeFilter"]["filters"]) == 2
    assert query["orderBy"][0]["direction"] == "ASCENDING"
    assert query["limit"] == 5


async def test_server_error_raises_store_error() -> None:
    store, _ = _store(lambda r: httpx.Response(503, text="unavailable"))
    with pytest.raises(DocumentStoreError) as exc_info:
        await store.query("dues")
    assert exc_info.value.error_code == "STORE_UNAVAILABLE"
