"""DTOs for document-change notifications."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChangeEvent:
    """One write to a tracked collection, delivered at least once.

    after is None for deletions; before is None for creations or when the
    source does not provide the previous state. event_id identifies the logical
    change across redeliveries (None when the source has no stable id).
    """

    collection: str
    document_id: str
    after: dict[str, Any] | None
    before: dict[str, Any] | None = None
    event_id: str | None = None

    @property
    def document(self) -> dict[str, Any]:
        """Document state conditions are evaluated against ({} after a delete)."""
        return self.after or {}
