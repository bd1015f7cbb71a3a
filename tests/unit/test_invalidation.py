"""Tests for the invalidation map, CacheInvalidator and CachedViews."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.cached_views import CachedViews
from app.core.config import Settings
from app.domain.enums import CacheKey, MutationCategory
from app.infrastructure.cache import CacheService
from app.infrastructure.cache.invalidation import (
    CACHE_KEY_SOURCES,
    INVALIDATION_MAP,
    CacheInvalidator,
    keys_for,
)


def test_map_purge_sets_are_exact() -> None:
    assert INVALIDATION_MAP[MutationCategory.INVENTORY] == {
        CacheKey.INVENTORY_ALL,
        CacheKey.LOW_STOCK,
        CacheKey.DASHBOARD,
    }
    assert INVALIDATION_MAP[MutationCategory.CUSTOMER] == {
        CacheKey.CUSTOMERS_ALL,
        CacheKey.CUSTOMER_DEBT,
        CacheKey.DASHBOARD,
    }
    assert INVALIDATION_MAP[MutationCategory.SUPPLIER] == {CacheKey.SUPPLIERS_ALL}
    assert INVALIDATION_MAP[MutationCategory.SALES] == {
        CacheKey.RECENT_SALES,
        CacheKey.DASHBOARD,
    }
    assert INVALIDATION_MAP[MutationCategory.FINANCIAL] == {CacheKey.DASHBOARD}


def test_every_category_is_mapped() -> None:
    assert set(INVALIDATION_MAP) == set(MutationCategory)


def test_every_key_is_purged_by_each_of_its_sources() -> None:
    """A view derived from a category's table is always in that category's purge set."""
    assert set(CACHE_KEY_SOURCES) == set(CacheKey)
    for key, sources in CACHE_KEY_SOURCES.items():
        for category in sources:
            assert key in INVALIDATION_MAP[category], (key, category)


def test_keys_for_unions_categories() -> None:
    assert keys_for(MutationCategory.SUPPLIER, MutationCategory.FINANCIAL) == {
        CacheKey.SUPPLIERS_ALL,
        CacheKey.DASHBOARD,
    }
    assert keys_for() == frozenset()


async def test_invalidator_passes_key_set_to_cache() -> None:
    cache = AsyncMock()
    dropped = await CacheInvalidator(cache).invalidate(MutationCategory.SALES)
    assert dropped == {CacheKey.RECENT_SALES, CacheKey.DASHBOARD}
    cache.invalidate_many.assert_awaited_once_with(
        [CacheKey.DASHBOARD, CacheKey.RECENT_SALES]
    )


async def test_customer_write_leaves_supplier_view_intact(cache: CacheService) -> None:
    for key in CacheKey:
        await cache.set(key, [key.value], 300)

    await CacheInvalidator(cache).invalidate(MutationCategory.CUSTOMER)

    assert await cache.get(CacheKey.CUSTOMERS_ALL) is None
    assert await cache.get(CacheKey.CUSTOMER_DEBT) is None
    assert await cache.get(CacheKey.DASHBOARD) is None
    assert await cache.get(CacheKey.SUPPLIERS_ALL) == ["suppliers-all"]
    assert await cache.get(CacheKey.INVENTORY_ALL) == ["inventory-all"]
    assert await cache.get(CacheKey.RECENT_SALES) == ["recent-sales"]


@pytest.fixture
def views(cache: CacheService, settings: Settings) -> CachedViews:
    return CachedViews(cache, settings)


async def test_views_use_configured_ttls(views: CachedViews, settings: Settings) -> None:
    assert views.ttls[CacheKey.INVENTORY_ALL] == settings.cache_ttl_inventory
    assert views.ttls[CacheKey.DASHBOARD] == settings.cache_ttl_dashboard
    assert set(views.ttls) == set(CacheKey)


async def test_inventory_view_expires_after_its_ttl(views: CachedViews, settings: Settings, clock) -> None:
    fetch = AsyncMock(return_value=[{"Item_ID": "ITEM-001"}])
    await views.get_inventory(fetch)
    clock.advance(settings.cache_ttl_inventory - 1)
    await views.get_inventory(fetch)
    assert fetch.await_count == 1
    clock.advance(1)
    await views.get_inventory(fetch)
    assert fetch.await_count == 2


async def test_dashboard_view_caches_dict(views: CachedViews) -> None:
    fetch = AsyncMock(return_value={"sales_count": 3})
    assert await views.get_dashboard(fetch) == {"sales_count": 3}
    assert await views.get_dashboard(fetch) == {"sales_count": 3}
    fetch.assert_awaited_once()


async def test_inventory_write_purges_dependent_views(views: CachedViews) -> None:
    inventory = AsyncMock(return_value=[{"Item_ID": "ITEM-001"}])
    low_stock = AsyncMock(return_value=[{"Item_ID": "ITEM-001"}])
    suppliers = AsyncMock(return_value=[{"Supplier_ID": "SUPP-001"}])
    await views.get_inventory(inventory)
    await views.get_low_stock(low_stock)
    await views.get_suppliers(suppliers)

    dropped = await views.invalidate_inventory_caches()

    assert CacheKey.LOW_STOCK in dropped
    await views.get_inventory(inventory)
    await views.get_low_stock(low_stock)
    await views.get_suppliers(suppliers)
    assert inventory.await_count == 2
    assert low_stock.await_count == 2
    assert suppliers.await_count == 1


async def test_invalidate_helpers_match_map(views: CachedViews) -> None:
    assert await views.invalidate_customer_caches() == INVALIDATION_MAP[MutationCategory.CUSTOMER]
    assert await views.invalidate_supplier_caches() == INVALIDATION_MAP[MutationCategory.SUPPLIER]
    assert await views.invalidate_sales_caches() == INVALIDATION_MAP[MutationCategory.SALES]
    assert await views.invalidate_financial_caches() == INVALIDATION_MAP[MutationCategory.FINANCIAL]
