"""
UTC datetime utilities.

Every datetime the engines persist or compare is timezone-aware UTC.
Stored documents may carry timestamps either as datetimes (Firestore
timestampValue, in-memory store) or as ISO-8601 strings written by other
clients; coerce_datetime normalizes both.
"""

from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a datetime to UTC.

    Naive values are assumed to already be UTC; aware values are converted.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def isoformat_ms(dt: datetime) -> str:
    """Format as ISO-8601 with millisecond precision and a trailing 'Z'."""
    aware = ensure_utc(dt)
    return aware.strftime("%Y-%m-%dT%H:%M:%S.") + f"{aware.microsecond // 1000:03d}Z"


def coerce_datetime(value: Any) -> datetime | None:
    """
    Return a UTC datetime for a stored timestamp, or None if it is not one.

    Args:
        value: datetime, ISO-8601 string (``Z`` suffix allowed), or anything else

    Returns:
        UTC-aware datetime or None
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str) and value:
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None
