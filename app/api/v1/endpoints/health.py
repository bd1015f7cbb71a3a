"""Health check endpoints, used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import ContainerDep
from app.core.config import get_settings
from app.core.constants import TABLE_SALES
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    settings = get_settings()
    return HealthResponse(version=settings.app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Record tables unreadable", "model": ReadinessErrorResponse}},
)
async def readiness_check(container: ContainerDep) -> ReadinessResponse | JSONResponse:
    """Return 200 if the record store answers and report the cache backend state.

    An unavailable cache does not fail readiness: reads fall through to
    the record store.
    """
    try:
        await container.records.get_headers(TABLE_SALES)
    except Exception as e:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                status="not_ready",
                message=f"Record store unavailable: {type(e).__name__}",
            ).model_dump(),
        )
    return ReadinessResponse(
        records_backend=container.settings.records_backend,
        cache_backend=container.settings.cache_backend,
        cache_available=container.cache.is_available(),
    )
