"""Redis cache backend.

Stores serialized cache envelopes with SETEX so Redis expires them
natively. On a dropped connection each call reconnects once and retries
before letting the fault reach CacheService, which degrades it to a
miss or a skipped write.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import redis.asyncio as redis

from app.core.config import get_settings
from app.infrastructure.redis_client import create_redis_client

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys collected per UNLINK round-trip in bulk deletes.
_CHUNK_SIZE = 500


class RedisCacheBackend:
    """Async Redis backend for CacheService.

    Call connect() at startup and disconnect() at shutdown. A client can
    be injected for tests or DI.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize backend.

        Args:
            redis_client: Optional Redis client for testing or DI.
        """
        self.redis = redis_client
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is None:
            settings = get_settings()
            try:
                self.redis = create_redis_client(settings)
                await self.redis.ping()
                self._connected = True
                logger.info(
                    "Redis cache connected: %s:%s",
                    settings.redis_host,
                    settings.redis_port,
                )
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning(
                    "Redis connection failed: %s. Cache disabled.",
                    e,
                )
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after disconnect. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError:
            logger.debug("Ignoring close error during reconnect")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _call(self, op: Callable[[redis.Redis], Awaitable[T]]) -> T:
        """Run op against the client, reconnecting once on connection loss."""
        if self.redis is None:
            raise redis.ConnectionError("Redis cache is not connected")
        try:
            return await op(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                return await op(self.redis)
            raise

    async def get_raw(self, key: str) -> str | None:
        return await self._call(lambda r: r.get(key))

    async def set_raw(self, key: str, value: str, ttl: int) -> None:
        await self._call(lambda r: r.setex(key, ttl, value))

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        deleted = 0
        for start in range(0, len(keys), _CHUNK_SIZE):
            chunk = keys[start:start + _CHUNK_SIZE]
            deleted += int(await self._call(lambda r, c=chunk: r.unlink(*c)) or 0)
        return deleted

    async def keys(self, prefix: str) -> list[str]:
        """Collect keys with SCAN (non-blocking) rather than KEYS."""

        async def scan(r: redis.Redis) -> list[str]:
            return [key async for key in r.scan_iter(match=f"{prefix}*")]

        return await self._call(scan)

    async def purge_expired(self) -> int:
        """Redis expires keys itself; nothing to purge."""
        return 0

