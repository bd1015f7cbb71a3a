"""Named cache-aside wrappers, one per cached view.

Each wrapper binds a fixed CacheKey and its configured TTL to whatever
fetch the caller passes, and each invalidate_* helper purges the key set
of one mutation category.
"""

from __future__ import annotations

from typing import Any

from app.application.interfaces.services import ICacheService, Producer
from app.core.config import Settings, get_settings
from app.domain.enums import CacheKey, MutationCategory
from app.infrastructure.cache.invalidation import CacheInvalidator


class CachedViews:
    """Entity-level read views and invalidation helpers over one cache."""

    def __init__(self, cache: ICacheService, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.cache = cache
        self.invalidator = CacheInvalidator(cache)
        self.ttls: dict[CacheKey, int] = {
            CacheKey.INVENTORY_ALL: settings.cache_ttl_inventory,
            CacheKey.CUSTOMERS_ALL: settings.cache_ttl_customers,
            CacheKey.SUPPLIERS_ALL: settings.cache_ttl_suppliers,
            CacheKey.RECENT_SALES: settings.cache_ttl_recent_sales,
            CacheKey.DASHBOARD: settings.cache_ttl_dashboard,
            CacheKey.LOW_STOCK: settings.cache_ttl_low_stock,
            CacheKey.CUSTOMER_DEBT: settings.cache_ttl_customer_debt,
        }

    async def _view(
        self, key: CacheKey, fetch: Producer, expected: type = list
    ) -> Any:
        return await self.cache.get_or_compute(key, self.ttls[key], fetch, expected)

    async def get_inventory(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.INVENTORY_ALL, fetch)

    async def get_customers(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.CUSTOMERS_ALL, fetch)

    async def get_suppliers(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.SUPPLIERS_ALL, fetch)

    async def get_recent_sales(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.RECENT_SALES, fetch)

    async def get_low_stock(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.LOW_STOCK, fetch)

    async def get_customer_debt(self, fetch: Producer) -> list[dict[str, Any]]:
        return await self._view(CacheKey.CUSTOMER_DEBT, fetch)

    async def get_dashboard(self, fetch: Producer) -> dict[str, Any]:
        """Dashboard aggregate is a single object, not a sequence."""
        return await self._view(CacheKey.DASHBOARD, fetch, expected=dict)

    async def invalidate_inventory_caches(self) -> frozenset[CacheKey]:
        return await self.invalidator.invalidate(MutationCategory.INVENTORY)

    async def invalidate_customer_caches(self) -> frozenset[CacheKey]:
        return await self.invalidator.invalidate(MutationCategory.CUSTOMER)

    async def invalidate_supplier_caches(self) -> frozenset[CacheKey]:
        return await self.invalidator.invalidate(MutationCategory.SUPPLIER)

    async def invalidate_sales_caches(self) -> frozenset[CacheKey]:
        return await self.invalidator.invalidate(MutationCategory.SALES)

    async def invalidate_financial_caches(self) -> frozenset[CacheKey]:
        return await self.invalidator.invalidate(MutationCategory.FINANCIAL)

    async def invalidate(self, *categories: MutationCategory) -> frozenset[CacheKey]:
        """Purge the union of several categories' keys (multi-table writes)."""
        return await self.invalidator.invalidate(*categories)
