"""Cache: TTL cache service, backends, key builders, and invalidation map.

Used by cached views and business services to front full-table reads.
CacheService owns serialization and fault degradation; backends only
store strings.
"""

from app.infrastructure.cache.cache_protocol import CacheBackendProtocol
from app.infrastructure.cache.cache_service import CacheService
from app.infrastructure.cache.invalidation import (
    CACHE_KEY_SOURCES,
    INVALIDATION_MAP,
    CacheInvalidator,
    keys_for,
)
from app.infrastructure.cache.keys import cache_key, namespace_prefix
from app.infrastructure.cache.memory_cache import MemoryCacheBackend
from app.infrastructure.cache.redis_cache import RedisCacheBackend

__all__ = [
    "CACHE_KEY_SOURCES",
    "INVALIDATION_MAP",
    "CacheBackendProtocol",
    "CacheInvalidator",
    "CacheService",
    "MemoryCacheBackend",
    "RedisCacheBackend",
    "cache_key",
    "keys_for",
    "namespace_prefix",
]
