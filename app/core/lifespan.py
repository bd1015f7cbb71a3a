"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no
business logic here, only wiring of infrastructure (record store, cache,
ID lock) through the composition root.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.core.container import build_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: build the service container (creates SQL tables and connects
    Redis when configured). Shutdown: close cache and lock connections,
    dispose the SQL engine.
    """
    settings = get_settings()

    # ---- Startup ----
    if getattr(app.state, "container", None) is None:
        app.state.container = await build_container(settings)
        app.state.owns_container = True
    else:
        app.state.owns_container = False
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if app.state.owns_container:
        await app.state.container.close()
        app.state.container = None
        logger.info("Service container closed")
