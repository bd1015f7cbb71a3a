"""Application layer: interfaces and services.

Depends only on domain and protocol definitions.
Infrastructure implements the interfaces (record stores, locks, cache).
"""

from app.application.interfaces import (
    ICacheService,
    ILockProvider,
    IMutex,
    IRecordStore,
)
from app.application.services import CachedViews, IdAllocator

__all__ = [
    "CachedViews",
    "ICacheService",
    "ILockProvider",
    "IMutex",
    "IRecordStore",
    "IdAllocator",
]
