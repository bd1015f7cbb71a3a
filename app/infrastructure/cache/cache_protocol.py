"""Cache backend protocol: raw string storage with per-entry TTL (DIP)."""

from typing import Protocol


class CacheBackendProtocol(Protocol):
    """Protocol for cache backends (memory, Redis). Used by CacheService.

    Backends store already-serialized strings. Faults may raise; the
    cache service degrades them to a miss or a skipped write.
    """

    def is_available(self) -> bool:
        """Return True if the backend is connected and usable."""
        ...

    async def get_raw(self, key: str) -> str | None:
        """Return the stored string or None if missing or expired."""
        ...

    async def set_raw(self, key: str, value: str, ttl: int) -> None:
        """Store value that expires ttl seconds from now."""
        ...

    async def delete(self, *keys: str) -> int:
        """Remove keys; return how many existed."""
        ...

    async def keys(self, prefix: str) -> list[str]:
        """Return stored keys starting with prefix."""
        ...

    async def purge_expired(self) -> int:
        """Drop expired entries still held; return how many were dropped."""
        ...
