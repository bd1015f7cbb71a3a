"""Distributed named locks backed by Redis (multi-process deployments).

Each handle wraps its own redis.asyncio Lock so the ownership token is
per acquisition. A lease (timeout) bounds how long a crashed holder can
keep the lock.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis
from redis.exceptions import LockError

logger = logging.getLogger(__name__)


class RedisMutex:
    """Handle on a Redis lock key with a bounded blocking wait."""

    def __init__(self, client: redis.Redis, name: str, lease_seconds: float) -> None:
        self.name = name
        self._lock = client.lock(name, timeout=lease_seconds)

    async def try_acquire(self, timeout_seconds: float) -> bool:
        """Block up to timeout_seconds for the lock. Redis faults propagate."""
        acquired = await self._lock.acquire(
            blocking=True, blocking_timeout=timeout_seconds
        )
        return bool(acquired)

    async def release(self) -> None:
        """Release the lock. A lost or expired lease is logged, not raised."""
        try:
            await self._lock.release()
        except LockError:
            logger.warning("Lock %s was not owned at release (lease expired?)", self.name)
        except redis.RedisError:
            logger.exception("Lock %s release failed; lease will expire", self.name)


class RedisLockProvider:
    """Lock handles sharing one Redis client."""

    def __init__(self, client: redis.Redis, lease_seconds: float = 60.0) -> None:
        self.client = client
        self.lease_seconds = lease_seconds

    def get_lock(self, name: str) -> RedisMutex:
        return RedisMutex(self.client, name, self.lease_seconds)
