"""TTL cache service fronting expensive full-table reads.

Values are JSON-serialized inside an envelope carrying cached_at and
expires_at, so expiry is judged against the injected clock whatever the
backend. Every backend or serialization fault is logged and degraded to
a miss or a skipped write; nothing here raises into business code.
Producer failures in get_or_compute are the one exception: they
propagate unchanged.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable
from enum import Enum
from typing import Any

from app.application.interfaces.services import Clock, Producer
from app.core.config import Settings, get_settings
from app.domain.enums import CacheKey
from app.infrastructure.cache.cache_protocol import CacheBackendProtocol
from app.infrastructure.cache.keys import cache_key, key_name, namespace_prefix

logger = logging.getLogger(__name__)


class CacheService:
    """Cache service with per-entry TTL over a pluggable backend.

    Construct once per process and pass to every caller. Keys are the
    logical names (CacheKey members or plain strings); namespacing is
    applied here.
    """

    def __init__(
        self,
        backend: CacheBackendProtocol,
        clock: Clock = time.time,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            backend: Raw string store (MemoryCacheBackend, RedisCacheBackend).
            clock: Returns epoch seconds; inject a fake for TTL tests.
            settings: Optional settings (namespace, version); defaults to get_settings().
        """
        self.backend = backend
        self.clock = clock
        self.settings = settings or get_settings()
        self._prefix = namespace_prefix(
            self.settings.cache_namespace, self.settings.cache_version
        )
        # Bumped on every invalidation; get_or_compute drops results computed
        # across one. Per-key counters plus one epoch for invalidate_all.
        self._generations: dict[str, int] = {}
        self._epoch = 0

    def is_available(self) -> bool:
        """Return True if the backend is usable."""
        return self.backend.is_available()

    def _key(self, key: str | Enum) -> str:
        return cache_key(key, self.settings.cache_namespace, self.settings.cache_version)

    def _generation(self, full_key: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(full_key, 0)

    async def _drop_entry(self, full_key: str) -> None:
        try:
            await self.backend.delete(full_key)
        except Exception:
            logger.exception("Cache could not drop entry %s", full_key)

    def _decode(self, raw: str) -> dict[str, Any]:
        """Parse an envelope; raise ValueError if it is not one."""
        envelope = json.loads(raw)
        if not isinstance(envelope, dict) or "value" not in envelope:
            raise ValueError("not a cache envelope")
        return envelope

    async def _read_envelope(self, key: str | Enum) -> dict[str, Any] | None:
        """Return the live envelope for key, or None on miss, expiry, corruption or fault."""
        if not self.is_available():
            return None
        full_key = self._key(key)
        try:
            raw = await self.backend.get_raw(full_key)
        except Exception:
            logger.exception("Cache get error for key %s", full_key)
            return None
        if raw is None:
            logger.debug("Cache MISS: %s", full_key)
            return None
        try:
            envelope = self._decode(raw)
        except ValueError:
            logger.warning("Cache entry %s is corrupt; dropping it", full_key)
            await self._drop_entry(full_key)
            return None
        expires_at = envelope.get("expires_at")
        if isinstance(expires_at, (int, float)) and self.clock() >= expires_at:
            logger.debug("Cache EXPIRED: %s", full_key)
            await self._drop_entry(full_key)
            return None
        logger.debug("Cache HIT: %s", full_key)
        return envelope

    async def get(self, key: str | Enum) -> Any | None:
        """Return cached value or None if absent, expired, corrupt, or unavailable.

        Args:
            key: Logical cache key (e.g. CacheKey.CUSTOMERS_ALL).

        Returns:
            Cached value or None.
        """
        envelope = await self._read_envelope(key)
        return None if envelope is None else envelope["value"]

    async def set(self, key: str | Enum, value: Any, ttl: int) -> bool:
        """Store value with TTL. Returns True on success.

        None values, non-positive TTLs, unserializable values and
        backend faults all return False.

        Args:
            key: Logical cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds.

        Returns:
            True if stored, False otherwise.
        """
        if value is None:
            logger.warning("Cache SET rejected for %s: value is None", key_name(key))
            return False
        if ttl <= 0:
            logger.warning("Cache SET rejected for %s: ttl must be positive", key_name(key))
            return False
        if not self.is_available():
            return False
        full_key = self._key(key)
        now = self.clock()
        try:
            serialized = json.dumps(
                {"value": value, "cached_at": now, "expires_at": now + ttl}
            )
        except (TypeError, ValueError):
            logger.warning("Cache SET skipped for %s: value is not serializable", full_key)
            return False
        try:
            await self.backend.set_raw(full_key, serialized, ttl)
        except Exception:
            logger.exception("Cache set error for key %s", full_key)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", full_key, ttl)
        return True

    async def invalidate(self, key: str | Enum) -> None:
        """Drop one key. No-op when absent."""
        await self.invalidate_many([key])

    async def invalidate_many(self, keys: Iterable[str | Enum]) -> None:
        """Drop every listed key. No-op for absent keys."""
        full_keys = [self._key(key) for key in keys]
        for full_key in full_keys:
            self._generations[full_key] = self._generations.get(full_key, 0) + 1
        if not full_keys or not self.is_available():
            return
        try:
            await self.backend.delete(*full_keys)
            logger.debug("Cache INVALIDATE: %s", ", ".join(full_keys))
        except Exception:
            logger.exception("Cache invalidate error for keys %s", full_keys)

    async def invalidate_all(self) -> None:
        """Drop every key in this namespace/version. Other namespaces are untouched."""
        self._epoch += 1
        if not self.is_available():
            return
        try:
            keys = await self.backend.keys(self._prefix)
            deleted = await self.backend.delete(*keys) if keys else 0
            logger.warning("Cache CLEARED: %s keys under %s", deleted, self._prefix)
        except Exception:
            logger.exception("Cache clear error for %s", self._prefix)

    async def purge_expired(self) -> int:
        """Drop expired entries the backend still holds. Returns count dropped."""
        if not self.is_available():
            return 0
        try:
            return await self.backend.purge_expired()
        except Exception:
            logger.exception("Cache purge error")
            return 0

    async def get_or_compute(
        self,
        key: str | Enum,
        ttl: int,
        producer: Producer,
        expected: type | tuple[type, ...] = list,
    ) -> Any:
        """Cache-aside read.

        A cached value counts as a hit only if it is an instance of
        expected. On miss the producer runs; its failures propagate.
        The result is cached only when it has the expected shape and is
        non-empty, and only if the key was not invalidated while the
        producer ran. Cache faults fall back to the producer transparently.

        Args:
            key: Logical cache key.
            ttl: Time-to-live in seconds for a freshly computed value.
            producer: Zero-argument async fetch.
            expected: Type (or types) a cached value must have.

        Returns:
            Cached or freshly computed value.
        """
        cached = await self.get(key)
        if cached is not None:
            if isinstance(cached, expected):
                return cached
            logger.warning(
                "Cache entry %s has unexpected shape %s; recomputing",
                key_name(key),
                type(cached).__name__,
            )
        generation = self._generation(self._key(key))
        result = await producer()
        if isinstance(result, expected) and result:
            if self._generation(self._key(key)) != generation:
                logger.debug(
                    "Cache SET skipped for %s: invalidated during compute", key_name(key)
                )
            else:
                await self.set(key, result, ttl)
        return result

    async def stats(self) -> list[dict[str, Any]]:
        """Describe each known cache key for operational visibility. Never raises.

        Returns:
            One dict per CacheKey: key, cached, size_bytes, value_type,
            count (sequences only), ttl_remaining.
        """
        report: list[dict[str, Any]] = []
        for key in CacheKey:
            entry: dict[str, Any] = {"key": key.value, "cached": False}
            try:
                raw = await self.backend.get_raw(self._key(key)) if self.is_available() else None
                if raw is not None:
                    envelope = self._decode(raw)
                    value = envelope["value"]
                    entry.update(
                        cached=True,
                        size_bytes=len(raw.encode("utf-8")),
                        value_type=type(value).__name__,
                    )
                    if isinstance(value, list):
                        entry["count"] = len(value)
                    expires_at = envelope.get("expires_at")
                    if isinstance(expires_at, (int, float)):
                        remaining = expires_at - self.clock()
                        if remaining <= 0:
                            entry = {"key": key.value, "cached": False}
                        else:
                            entry["ttl_remaining"] = remaining
            except Exception as e:
                logger.warning("Cache stats failed for %s: %s", key.value, e)
                entry["error"] = type(e).__name__
            report.append(entry)
        return report
