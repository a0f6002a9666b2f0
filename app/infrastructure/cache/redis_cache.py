"""Redis-backed cache service.

Async Redis client with TTL support, used for change-event deduplication.
Every operation degrades to a "miss" when Redis is unreachable; a single
reconnect is attempted on connection errors.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache. Call connect() at startup and disconnect() at shutdown."""

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional pre-built client (tests, DI). Treated as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Open the Redis connection; leaves the cache disabled if Redis is down."""
        if self.redis is not None and self._connected:
            return
        password = self.settings.redis_password
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=password.get_secret_value() if password else None,
            max_connections=self.settings.redis_max_connections,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as exc:
            logger.warning("Redis connection failed: %s. Cache disabled.", exc)
            await client.aclose()
            self.redis = None
            self._connected = False
            return
        self.redis = client
        self._connected = True
        logger.info("Redis cache connected: %s:%s", self.settings.redis_host, self.settings.redis_port)

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _call(
        self, name: str, key: str, op: Callable[[redis.Redis], Awaitable[T]], default: T
    ) -> T:
        """Run op against Redis, retrying once after a reconnect on connection loss."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await op(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning("Redis %s lost connection for key %s; reconnecting", name, key)
            await self.disconnect()
            await self.connect()
            if self.redis is None:
                return default
            try:
                return await op(self.redis)
            except redis.RedisError:
                logger.exception("Redis %s failed for key %s after reconnect", name, key)
                return default
        except redis.RedisError:
            logger.exception("Redis %s failed for key %s", name, key)
            return default

    async def get(self, key: str) -> Any | None:
        """Return the JSON-decoded value, or None when missing or unavailable."""
        raw = await self._call("GET", key, lambda r: r.get(key), None)
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store a JSON-serializable value with a TTL in seconds."""
        payload = json.dumps(value)
        return bool(await self._call("SETEX", key, lambda r: r.setex(key, ttl, payload), False))

    async def set_if_absent(self, key: str, value: Any, ttl: int) -> bool | None:
        """Atomically store value only if key does not exist (SET NX EX).

        Returns:
            True if stored, False if the key already existed, None if Redis is
            unavailable or the command failed.
        """
        payload = json.dumps(value)
        failed = object()
        result = await self._call(
            "SET NX", key, lambda r: r.set(key, payload, ex=ttl, nx=True), failed
        )
        if result is failed:
            return None
        return bool(result)

    async def delete(self, key: str) -> bool:
        return bool(await self._call("DELETE", key, lambda r: r.delete(key), 0))
