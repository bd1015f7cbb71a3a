"""In-process cache backend with clock-driven expiry.

Expiry is lazy (checked on read) plus purge_expired() for housekeeping.
The clock is injected so TTL behavior is deterministic in tests.
"""

from __future__ import annotations

import logging
import time

from app.application.interfaces.services import Clock

logger = logging.getLogger(__name__)


class MemoryCacheBackend:
    """Dict-backed store of (serialized value, expires_at) pairs."""

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    def is_available(self) -> bool:
        return True

    def _is_expired(self, expires_at: float) -> bool:
        return self._clock() >= expires_at

    async def get_raw(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._is_expired(expires_at):
            del self._entries[key]
            return None
        return value

    async def set_raw(self, key: str, value: str, ttl: int) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self._entries.pop(key, None) is not None:
                deleted += 1
        return deleted

    async def keys(self, prefix: str) -> list[str]:
        return [key for key in self._entries if key.startswith(prefix)]

    async def purge_expired(self) -> int:
        expired = [
            key for key, (_, expires_at) in self._entries.items()
            if self._is_expired(expires_at)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cache PURGE: %s expired entries", len(expired))
        return len(expired)
