"""Cache inspection API schemas."""

from pydantic import BaseModel, Field


class CacheKeyStats(BaseModel):
    """State of one fixed cache key."""

    key: str = Field(..., description="Logical key, e.g. inventory-all")
    cached: bool = Field(..., description="True when a live entry exists")
    size_bytes: int | None = Field(default=None, description="Serialized entry size")
    value_type: str | None = Field(default=None, description="Python type of the cached value")
    count: int | None = Field(default=None, description="Element count for list values")
    ttl_remaining: float | None = Field(default=None, description="Seconds until expiry")
    error: str | None = Field(default=None, description="Exception type if inspection failed")


class CacheStatsResponse(BaseModel):
    """Response for GET /cache/stats."""

    available: bool = Field(..., description="Cache backend reachable")
    keys: list[CacheKeyStats] = Field(default_factory=list)


class CacheClearResponse(BaseModel):
    """Response for DELETE /cache."""

    status: str = Field(default="cleared")
