"""Presentation-layer dependency injection.

Routes depend on these Depends() callables, never on infrastructure
directly. The container itself is built in the app lifespan
(app.core.lifespan) and stored on app.state.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from app.core.container import ServiceContainer
from app.infrastructure.cache import CacheService


def get_container(request: Request) -> ServiceContainer:
    """Return the service container created at startup.

    Raises:
        HTTPException: 503 when the app has not finished starting.
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return container


def get_cache(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> CacheService:
    return container.cache


ContainerDep = Annotated[ServiceContainer, Depends(get_container)]
CacheDep = Annotated[CacheService, Depends(get_cache)]
