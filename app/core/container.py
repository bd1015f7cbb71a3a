"""Composition root: builds infrastructure and services from settings.

build_container() is called once from the app lifespan (or directly by
scripts and tests). Routes reach the services through app.state.container,
never by constructing infrastructure themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import redis.asyncio as redis

from app.application.interfaces import ILockProvider, IRecordStore
from app.application.services import (
    CachedViews,
    CustomerService,
    DashboardService,
    FinancialService,
    IdAllocator,
    InventoryService,
    SalesService,
    SupplierService,
)
from app.core.config import Settings, get_settings
from app.infrastructure.cache import CacheService, MemoryCacheBackend, RedisCacheBackend
from app.infrastructure.locking import LocalLockProvider, RedisLockProvider
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import InMemoryRecordStore, SqlRecordStore
from app.infrastructure.redis_client import create_redis_client
from app.shared.telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Process-wide services sharing one record store, cache and lock provider."""

    settings: Settings
    records: IRecordStore
    cache: CacheService
    locks: ILockProvider
    allocator: IdAllocator
    views: CachedViews
    inventory: InventoryService
    customers: CustomerService
    suppliers: SupplierService
    financials: FinancialService
    sales: SalesService
    dashboard: DashboardService
    redis_client: redis.Redis | None = field(default=None, repr=False)

    async def close(self) -> None:
        """Release connections opened by build_container (app shutdown)."""
        if isinstance(self.cache.backend, RedisCacheBackend):
            await self.cache.backend.disconnect()
        elif self.redis_client is not None:
            await self.redis_client.aclose()
        if isinstance(self.records, SqlRecordStore):
            await database.dispose_engine()


def wire_services(
    settings: Settings,
    records: IRecordStore,
    cache: CacheService,
    locks: ILockProvider,
    redis_client: redis.Redis | None = None,
) -> ServiceContainer:
    """Build the application services over already-constructed infrastructure."""
    allocator = IdAllocator(records, locks, settings)
    views = CachedViews(cache, settings)
    financials = FinancialService(records, allocator, views)
    return ServiceContainer(
        settings=settings,
        records=records,
        cache=cache,
        locks=locks,
        allocator=allocator,
        views=views,
        inventory=InventoryService(records, allocator, views),
        customers=CustomerService(records, allocator, views, financials=financials),
        suppliers=SupplierService(records, allocator, views),
        financials=financials,
        sales=SalesService(records, allocator, views, financials=financials, settings=settings),
        dashboard=DashboardService(records, allocator, views),
        redis_client=redis_client,
    )


async def build_container(settings: Settings | None = None) -> ServiceContainer:
    """Construct the backends selected in settings and wire the services.

    Records: in-memory or SQL (tables created on startup). Cache: in-memory
    or Redis. The ID lock is Redis-backed whenever Redis is enabled, so
    several app processes share one allocation lock.
    """
    settings = settings or get_settings()

    records: IRecordStore
    if settings.records_backend == "sql":
        store = SqlRecordStore(database.get_engine())
        await store.initialize()
        records = store
    else:
        records = InMemoryRecordStore()

    redis_client = create_redis_client(settings) if settings.redis_enabled else None

    if settings.cache_backend == "redis" and redis_client is not None:
        backend = RedisCacheBackend(redis_client)
        await backend.connect()
        cache = CacheService(backend, settings=settings)
    else:
        cache = CacheService(MemoryCacheBackend(), settings=settings)

    locks: ILockProvider
    if redis_client is not None:
        locks = RedisLockProvider(redis_client, settings.id_lock_lease_seconds)
    else:
        locks = LocalLockProvider()

    logger.info(
        "Services wired: records=%s cache=%s lock=%s",
        settings.records_backend,
        settings.cache_backend,
        type(locks).__name__,
    )
    return wire_services(settings, records, cache, locks, redis_client)
