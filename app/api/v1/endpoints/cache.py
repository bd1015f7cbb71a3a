"""Cache inspection and manual purge."""

import logging

from fastapi import APIRouter

from app.api.v1.dependencies import CacheDep
from app.schemas.cache import CacheClearResponse, CacheKeyStats, CacheStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: CacheDep) -> CacheStatsResponse:
    """Describe every fixed cache key. Never fails on cache faults."""
    entries = await cache.stats()
    return CacheStatsResponse(
        available=cache.is_available(),
        keys=[CacheKeyStats(**entry) for entry in entries],
    )


@router.delete("", response_model=CacheClearResponse)
async def clear_cache(cache: CacheDep) -> CacheClearResponse:
    """Drop every entry in this application's cache namespace."""
    await cache.invalidate_all()
    logger.info("Cache cleared via API")
    return CacheClearResponse()
