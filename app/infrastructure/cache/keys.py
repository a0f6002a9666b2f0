"""Cache key builders. Prefixes come from app.core.constants."""

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_CHANGE_EVENT


def change_event_key(event_id: str) -> str:
    """Key claimed once per delivered change event (e.g. change_event:<event_id>)."""
    return f"{CACHE_PREFIX_CHANGE_EVENT}{CACHE_KEY_SEP}{event_id}"
