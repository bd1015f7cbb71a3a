"""Process-local named locks (single-process deployments and tests)."""

from __future__ import annotations

import asyncio
import logging

logger = logging.getLogger(__name__)


class LocalMutex:
    """Handle on a shared asyncio.Lock; tracks whether this handle holds it."""

    def __init__(self, name: str, lock: asyncio.Lock) -> None:
        self.name = name
        self._lock = lock
        self._held = False

    async def try_acquire(self, timeout_seconds: float) -> bool:
        """Wait up to timeout_seconds for the lock; return True if acquired."""
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=timeout_seconds)
        except TimeoutError:
            logger.debug("Lock %s not acquired within %ss", self.name, timeout_seconds)
            return False
        self._held = True
        return True

    async def release(self) -> None:
        """Release the lock if this handle holds it."""
        if not self._held:
            logger.warning("Release of lock %s that this handle does not hold", self.name)
            return
        self._held = False
        self._lock.release()

    def locked(self) -> bool:
        """Return True if any handle currently holds the lock."""
        return self._lock.locked()


class LocalLockProvider:
    """One asyncio.Lock per name, shared by every handle for that name."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def get_lock(self, name: str) -> LocalMutex:
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return LocalMutex(name, lock)
