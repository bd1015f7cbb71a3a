"""Pydantic request/response schemas for the API."""

from app.schemas.cache import CacheClearResponse, CacheKeyStats, CacheStatsResponse
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "CacheClearResponse",
    "CacheKeyStats",
    "CacheStatsResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
