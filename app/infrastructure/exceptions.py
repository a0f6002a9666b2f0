"""Infrastructure exceptions for document store operations.

Extend OrgException so the API maps them to HTTP responses consistently.
"""

from app.domain.exceptions import OrgException


class DocumentStoreError(OrgException):
    """The document store rejected or failed a request."""

    def __init__(self, operation: str, status_code: int | None, reason: str) -> None:
        super().__init__(
            f"Document store {operation} failed",
            "STORE_UNAVAILABLE",
            {"operation": operation, "status_code": status_code, "reason": reason},
        )


class DocumentExistsError(OrgException):
    """A create targeted a document id that already exists."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(
            f"Document already exists: {collection}/{document_id}",
            "ALREADY_EXISTS",
            {"resource_type": collection, "resource_id": document_id},
        )
