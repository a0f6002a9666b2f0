"""Firestore-backed implementation of IDocumentStore (REST API)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.store import QueryFilter, StoredDocument
from app.domain.exceptions import DocumentNotFoundError
from app.infrastructure.exceptions import DocumentExistsError
from app.infrastructure.firebase._rest_client import CommitRejected, FirestoreRESTClient
from app.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
    encode_value,
    field_path,
)
from app.shared.utils.generators import generate_cuid

_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
}


def _field_filter(f: QueryFilter) -> dict[str, Any]:
    op = _OP_MAP.get(f.op)
    if op is None:
        raise ValueError(f"Unsupported query operator: {f.op!r}")
    return {
        "fieldFilter": {
            "field": {"fieldPath": field_path(f.field)},
            "op": op,
            "value": encode_value(f.value),
        }
    }


def _snapshot(resource: dict) -> StoredDocument:
    name = resource.get("name", "")
    return StoredDocument(id=name.rsplit("/", 1)[-1], data=decode_fields(resource.get("fields")))


class FirestoreDocumentStore:
    """Document store over Firestore REST v1.

    Creates use an ``exists: false`` precondition and updates use
    ``exists: true``, so both are single atomic commits.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _create_write(self, collection: str, document_id: str, data: dict[str, Any]) -> dict:
        fields, transforms = encode_fields(data)
        write: dict[str, Any] = {
            "update": {"name": self._client.document_name(collection, document_id), "fields": fields},
            "currentDocument": {"exists": False},
        }
        if transforms:
            write["updateTransforms"] = transforms
        return write

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        resource = await self._client.get_document(self._client.document_name(collection, document_id))
        if resource is None:
            return None
        return _snapshot(resource)

    async def query(
        self,
        collection: str,
        filters: list[QueryFilter] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        structured: dict[str, Any] = {"from": [{"collectionId": collection}]}
        clauses = [_field_filter(f) for f in filters or []]
        if len(clauses) == 1:
            structured["where"] = clauses[0]
        elif clauses:
            structured["where"] = {"compositeFilter": {"op": "AND", "filters": clauses}}
        if order_by:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": field_path(order_by)},
                    "direction": "DESCENDING" if descending else "ASCENDING",
                }
            ]
        if limit:
            structured["limit"] = limit
        return [_snapshot(r) for r in await self._client.run_query(structured)]

    async def create(
        self,
        collection: str,
        data: dict[str, Any],
        document_id: str | None = None,
    ) -> str:
        doc_id = document_id or generate_cuid()
        try:
            await self._client.commit([self._create_write(collection, doc_id, data)])
        except CommitRejected:
            raise DocumentExistsError(collection, doc_id) from None
        return doc_id

    async def create_many(self, collection: str, items: list[dict[str, Any]]) -> list[str]:
        if not items:
            return []
        ids = [generate_cuid() for _ in items]
        writes = [self._create_write(collection, i, data) for i, data in zip(ids, items)]
        try:
            await self._client.commit(writes)
        except CommitRejected as exc:
            raise DocumentExistsError(collection, ",".join(ids)) from exc
        return ids

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        fields, transforms = encode_fields(data)
        write: dict[str, Any] = {
            "update": {"name": self._client.document_name(collection, document_id), "fields": fields},
            "updateMask": {"fieldPaths": [field_path(k) for k in fields]},
            "currentDocument": {"exists": True},
        }
        if transforms:
            write["updateTransforms"] = transforms
        try:
            await self._client.commit([write])
        except CommitRejected:
            raise DocumentNotFoundError(collection, document_id) from None

    async def delete(self, collection: str, document_id: str) -> None:
        await self._client.commit([{"delete": self._client.document_name(collection, document_id)}])
