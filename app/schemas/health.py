"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str | None = Field(default=None, description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready when ready."""

    status: str = Field(default="ok", description="Readiness status")
    records_backend: str = Field(..., description="Record store in use (memory or sql)")
    cache_backend: str = Field(..., description="Cache backend in use (memory or redis)")
    cache_available: bool = Field(..., description="False while the cache backend is down")


class ReadinessErrorResponse(BaseModel):
    """Response for GET /health/ready when the record store is unreachable (503)."""

    status: str = Field(default="not_ready", description="Readiness status")
    message: str = Field(..., description="Reason")
