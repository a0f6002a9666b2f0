"""Redis cache and change-event deduplication."""

from app.infrastructure.cache.event_dedup import RedisEventDeduplicator
from app.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "RedisEventDeduplicator"]
