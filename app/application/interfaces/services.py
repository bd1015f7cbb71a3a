"""Service interfaces (ports) for the application layer.

Protocols define contracts for locking and caching used by application
services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Protocol

# Zero-argument async fetch used by cache-aside reads.
Producer = Callable[[], Awaitable[Any]]

# Returns current time as epoch seconds (injected for TTL tests).
Clock = Callable[[], float]


# Mutual exclusion interface
class IMutex(Protocol):
    """Protocol for a named mutual-exclusion handle with a bounded wait."""

    async def try_acquire(self, timeout_seconds: float) -> bool:
        """Wait up to timeout_seconds for the lock; return True if acquired."""

    async def release(self) -> None:
        """Release the lock if held by this handle. Never raises."""


# Lock provider interface
class ILockProvider(Protocol):
    """Protocol for obtaining lock handles by name.

    Every handle for the same name guards one shared resource.
    """

    def get_lock(self, name: str) -> IMutex:
        """Return a fresh handle for the named lock."""


# Cache service interface
class ICacheService(Protocol):
    """Protocol for the TTL cache used by cached views (DIP)."""

    async def get(self, key: str) -> Any:
        """Return cached value or None (absent, expired, or unreadable)."""

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value with TTL. Returns True on success."""

    async def invalidate(self, key: str) -> None:
        """Drop key. No-op when absent."""

    async def invalidate_many(self, keys: Iterable[str]) -> None:
        """Drop every key. No-op for absent keys."""

    async def invalidate_all(self) -> None:
        """Drop every key in the cache namespace."""

    async def get_or_compute(
        self,
        key: str,
        ttl: int,
        producer: Producer,
        expected: type | tuple[type, ...] = list,
    ) -> Any:
        """Return cached value on typed hit; else call producer and cache its result."""
