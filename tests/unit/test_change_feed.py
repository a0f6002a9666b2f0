"""Tests for the in-process change feed and Redis event deduplication."""

from unittest.mock import AsyncMock

import redis.asyncio as redis

from app.application.dtos.change import ChangeEvent
from app.infrastructure.cache import CacheService, RedisEventDeduplicator
from app.infrastructure.messaging import InProcessChangeFeed

_EVENT = ChangeEvent(collection="members", document_id="m1", after={"a": 1}, event_id="ev-1")


async def test_failing_subscriber_does_not_block_others() -> None:
    feed = InProcessChangeFeed()
    seen = []

    async def broken(event: ChangeEvent) -> None:
        raise RuntimeError("boom")

    async def healthy(event: ChangeEvent) -> None:
        seen.append(event.document_id)

    feed.subscribe(broken)
    feed.subscribe(healthy)
    await feed.publish(_EVENT)

    assert seen == ["m1"]
    assert feed.subscriber_count == 2


def test_deleted_document_evaluates_as_empty() -> None:
    assert ChangeEvent(collection="c", document_id="d", after=None).document == {}


async def test_dedup_claims_first_delivery_only() -> None:
    client = AsyncMock()
    client.set.side_effect = [True, None]
    dedup = RedisEventDeduplicator(CacheService(redis_client=client), ttl_seconds=60)

    assert await dedup.claim("ev-1") is True
    assert await dedup.claim("ev-1") is False
    client.set.assert_awaited_with("change_event:ev-1", "1", ex=60, nx=True)


async def test_dedup_fails_open_without_redis() -> None:
    cache = CacheService()
    assert not cache.is_available()
    assert await RedisEventDeduplicator(cache, ttl_seconds=60).claim("ev-1") is True


async def test_dedup_fails_open_on_redis_error() -> None:
    client = AsyncMock()
    client.set.side_effect = redis.RedisError("READONLY")
    dedup = RedisEventDeduplicator(CacheService(redis_client=client), ttl_seconds=60)
    assert await dedup.claim("ev-1") is True
