"""Document store port.

The engines and repositories talk to persistence only through this protocol.
Adapters: Firestore REST (production) and in-memory (local development, tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Protocol

if TYPE_CHECKING:
    from app.application.dtos.store import QueryFilter, StoredDocument


class _ServerTimestamp:
    """Sentinel: the store replaces this value with its own commit time."""

    _instance: _ServerTimestamp | None = None

    def __new__(cls) -> _ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


# Only honoured on top-level fields of create/update payloads.
SERVER_TIMESTAMP: Final = _ServerTimestamp()


class IDocumentStore(Protocol):
    """Async document store. Each single create/update/delete call is atomic."""

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        """Return the document, or None when it does not exist."""

    async def query(
        self,
        collection: str,
        filters: list[QueryFilter] | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Return documents matching all filters."""

    async def create(
        self,
        collection: str,
        data: dict[str, Any],
        document_id: str | None = None,
    ) -> str:
        """Create a document and return its id (generated when not given)."""

    async def create_many(
        self, collection: str, items: list[dict[str, Any]]
    ) -> list[str]:
        """Create several documents in one atomic batch; return their ids in order."""

    async def update(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        """Merge data into an existing document. Raises DocumentNotFoundError when missing."""

    async def delete(self, collection: str, document_id: str) -> None:
        """Delete the document; no-op when it does not exist."""
