"""Invalidation map: which cache keys each kind of write makes stale.

CACHE_KEY_SOURCES records the tables (by mutation category) each cached
view is derived from; INVALIDATION_MAP is its inverse, written out so
the purge set for a category is visible at a glance. Every key derived
even partly from a category's table must appear in that category's set.
"""

from __future__ import annotations

import logging

from app.application.interfaces.services import ICacheService
from app.domain.enums import CacheKey, MutationCategory

logger = logging.getLogger(__name__)

CACHE_KEY_SOURCES: dict[CacheKey, frozenset[MutationCategory]] = {
    CacheKey.INVENTORY_ALL: frozenset({MutationCategory.INVENTORY}),
    CacheKey.LOW_STOCK: frozenset({MutationCategory.INVENTORY}),
    CacheKey.CUSTOMERS_ALL: frozenset({MutationCategory.CUSTOMER}),
    CacheKey.CUSTOMER_DEBT: frozenset({MutationCategory.CUSTOMER}),
    CacheKey.SUPPLIERS_ALL: frozenset({MutationCategory.SUPPLIER}),
    CacheKey.RECENT_SALES: frozenset({MutationCategory.SALES}),
    CacheKey.DASHBOARD: frozenset(
        {
            MutationCategory.SALES,
            MutationCategory.INVENTORY,
            MutationCategory.CUSTOMER,
            MutationCategory.FINANCIAL,
        }
    ),
}

INVALIDATION_MAP: dict[MutationCategory, frozenset[CacheKey]] = {
    MutationCategory.INVENTORY: frozenset(
        {CacheKey.INVENTORY_ALL, CacheKey.LOW_STOCK, CacheKey.DASHBOARD}
    ),
    MutationCategory.CUSTOMER: frozenset(
        {CacheKey.CUSTOMERS_ALL, CacheKey.CUSTOMER_DEBT, CacheKey.DASHBOARD}
    ),
    MutationCategory.SUPPLIER: frozenset({CacheKey.SUPPLIERS_ALL}),
    MutationCategory.SALES: frozenset({CacheKey.RECENT_SALES, CacheKey.DASHBOARD}),
    MutationCategory.FINANCIAL: frozenset({CacheKey.DASHBOARD}),
}


def keys_for(*categories: MutationCategory) -> frozenset[CacheKey]:
    """Return the union of cache keys to purge for the given categories."""
    keys: set[CacheKey] = set()
    for category in categories:
        keys |= INVALIDATION_MAP[category]
    return frozenset(keys)


class CacheInvalidator:
    """Purges the fixed key set of each mutation category, synchronously."""

    def __init__(self, cache: ICacheService) -> None:
        self.cache = cache

    async def invalidate(self, *categories: MutationCategory) -> frozenset[CacheKey]:
        """Drop every key the categories make stale; return the keys dropped.

        Runs in the caller's control flow so the write's call returns only
        after its dependent views are gone.
        """
        keys = keys_for(*categories)
        if keys:
            await self.cache.invalidate_many(sorted(keys, key=lambda k: k.value))
            logger.debug(
                "Invalidated %s for %s",
                sorted(k.value for k in keys),
                [c.value for c in categories],
            )
        return keys
