"""Identifier generators for stored documents and change events."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant identifier (CUID2)."""
    result = _cuid()
    if not isinstance(result, str):
        raise TypeError(f"Expected str from cuid generator, got {type(result).__name__}")
    return result


def generate_event_id(collection: str, document_id: str) -> str:
    """Return a unique id for one change to ``collection/document_id``."""
    return f"{collection}/{document_id}/{generate_cuid()}"
