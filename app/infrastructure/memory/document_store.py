"""In-memory implementation of IDocumentStore.

Used for local development (DATABASE_BACKEND=memory) and tests. Documents are
deep-copied on the way in and out so callers never share mutable state with
the store. Optionally publishes every write as a ChangeEvent, standing in for
the production change-notification source.
"""

from __future__ import annotations

import asyncio
import copy
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.dtos.change import ChangeEvent
from app.application.dtos.store import QueryFilter, StoredDocument
from app.application.interfaces.store import SERVER_TIMESTAMP
from app.domain.exceptions import DocumentNotFoundError
from app.infrastructure.exceptions import DocumentExistsError
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid, generate_event_id

if TYPE_CHECKING:
    from app.application.interfaces.services import IChangeSubscription


def _resolve(data: dict[str, Any], now: datetime) -> dict[str, Any]:
    return {k: (now if v is SERVER_TIMESTAMP else copy.deepcopy(v)) for k, v in data.items()}


def _sort_key(value: Any) -> tuple[int, Any]:
    """Order like Firestore: null < bool < number < timestamp < string < other."""
    if value is None:
        return (0, 0)
    if isinstance(value, bool):
        return (1, value)
    if isinstance(value, (int, float)):
        return (2, value)
    if isinstance(value, datetime):
        return (3, value)
    if isinstance(value, str):
        return (4, value)
    return (5, str(value))


def _matches(data: dict[str, Any], f: QueryFilter) -> bool:
    if f.field not in data:
        return False
    value = data[f.field]
    if f.op == "==":
        return value == f.value
    if f.op == "!=":
        return value != f.value
    if f.op == "in":
        return value in f.value
    if f.op == "not-in":
        return value not in f.value
    if f.op in ("array_contains", "array-contains"):
        return isinstance(value, list) and f.value in value
    left, right = _sort_key(value), _sort_key(f.value)
    if left[0] != right[0]:
        return False
    if f.op == "<":
        return left < right
    if f.op == "<=":
        return left <= right
    if f.op == ">":
        return left > right
    if f.op == ">=":
        return left >= right
    raise ValueError(f"Unsupported query operator: {f.op!r}")


class InMemoryDocumentStore:
    """Dict-backed document store; each call holds one asyncio.Lock for atomicity."""

    def __init__(self, change_feed: IChangeSubscription | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()
        self._change_feed = change_feed

    async def _emit(self, collection: str, document_id: str, before: Any, after: Any) -> None:
        if self._change_feed is None:
            return
        await self._change_feed.publish(
            ChangeEvent(
                collection=collection,
                document_id=document_id,
                before=copy.deepcopy(before),
                after=copy.deepcopy(after),
                event_id=generate_event_id(collection, document_id),
            )
        )

    def dump(self, collection: str) -> dict[str, dict[str, Any]]:
        """Snapshot of a whole collection (id -> data)."""
        return copy.deepcopy(self._collections.get(collection, {}))

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        async with self._lock:
            data = self._collections.get(collection, {}).get(document_id)
            if data is None:
                return None
            return StoredDocument(id=document_id, data=copy.deepcopy(data))

    async def query(
        self,
        collection: str,
        filters: list[QueryFilter] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        async with self._lock:
            docs = [
                (doc_id, data)
                for doc_id, data in self._collections.get(collection, {}).items()
                if all(_matches(data, f) for f in filters or [])
            ]
            if order_by:
                docs = [d for d in docs if order_by in d[1]]
                docs.sort(key=lambda d: _sort_key(d[1][order_by]), reverse=descending)
            if limit:
                docs = docs[:limit]
            return [StoredDocument(id=i, data=copy.deepcopy(d)) for i, d in docs]

    async def create(
        self,
        collection: str,
        data: dict[str, Any],
        document_id: str | None = None,
    ) -> str:
        doc_id = document_id or generate_cuid()
        async with self._lock:
            docs = self._collections.setdefault(collection, {})
            if doc_id in docs:
                raise DocumentExistsError(collection, doc_id)
            stored = _resolve(data, utc_now())
            docs[doc_id] = stored
        await self._emit(collection, doc_id, None, stored)
        return doc_id

    async def create_many(self, collection: str, items: list[dict[str, Any]]) -> list[str]:
        now = utc_now()
        created = [(generate_cuid(), _resolve(item, now)) for item in items]
        async with self._lock:
            self._collections.setdefault(collection, {}).update(created)
        for doc_id, stored in created:
            await self._emit(collection, doc_id, None, stored)
        return [doc_id for doc_id, _ in created]

    async def update(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        async with self._lock:
            current = self._collections.get(collection, {}).get(document_id)
            if current is None:
                raise DocumentNotFoundError(collection, document_id)
            before = copy.deepcopy(current)
            current.update(_resolve(data, utc_now()))
            after = copy.deepcopy(current)
        await self._emit(collection, document_id, before, after)

    async def delete(self, collection: str, document_id: str) -> None:
        async with self._lock:
            before = self._collections.get(collection, {}).pop(document_id, None)
        if before is not None:
            await self._emit(collection, document_id, before, None)
