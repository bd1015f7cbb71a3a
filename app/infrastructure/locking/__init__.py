"""Locking: named mutual-exclusion providers (process-local and Redis)."""

from app.infrastructure.locking.local_lock import LocalLockProvider, LocalMutex
from app.infrastructure.locking.redis_lock import RedisLockProvider, RedisMutex

__all__ = [
    "LocalLockProvider",
    "LocalMutex",
    "RedisLockProvider",
    "RedisMutex",
]
