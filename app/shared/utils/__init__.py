"""Shared utilities: datetime and identifier generators."""

from app.shared.utils.datetime import coerce_datetime, ensure_utc, isoformat_ms, utc_now
from app.shared.utils.generators import generate_cuid, generate_event_id

__all__ = [
    "coerce_datetime",
    "ensure_utc",
    "generate_cuid",
    "generate_event_id",
    "isoformat_ms",
    "utc_now",
]
