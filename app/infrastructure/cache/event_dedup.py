"""Redis-backed deduplication of redelivered change events."""

from __future__ import annotations

from app.infrastructure.cache.keys import change_event_key
from app.infrastructure.cache.redis_cache import CacheService
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RedisEventDeduplicator:
    """Implements IEventDeduplicator with SET NX EX on change_event:<event_id>.

    When Redis is unavailable every event is treated as new, so redelivery
    re-fires rules rather than dropping first deliveries.
    """

    def __init__(self, cache: CacheService, ttl_seconds: int) -> None:
        self._cache = cache
        self._ttl = ttl_seconds

    async def claim(self, event_id: str) -> bool:
        claimed = await self._cache.set_if_absent(change_event_key(event_id), 1, self._ttl)
        if claimed is None:
            logger.debug("Dedup unavailable, treating %s as new", event_id)
            return True
        return claimed
