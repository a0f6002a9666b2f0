"""DTOs exchanged with the document store port."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class StoredDocument:
    """A document read from the store (id + field data)."""

    id: str
    data: dict[str, Any]


@dataclass(frozen=True)
class QueryFilter:
    """Single field filter; filters passed together are combined with AND.

    op is one of ==, !=, <, <=, >, >=, in, array_contains.
    """

    field: str
    op: str
    value: Any
