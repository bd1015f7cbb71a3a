"""Tests for the cache inspection endpoints and domain error mapping."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.application.dtos import ItemCreate
from app.core.container import ServiceContainer
from app.core.exception_handlers import register_exception_handlers
from app.domain.enums import CacheKey
from app.domain.exceptions import (
    ColumnNotFoundException,
    IdAllocationBusyException,
    IdAllocationRetryExhaustedException,
    InsufficientStockException,
    ResourceNotFoundException,
    ValidationException,
)


async def test_stats_lists_every_key(client: AsyncClient, container: ServiceContainer) -> None:
    await container.inventory.add_item(ItemCreate(name="Tea", price=2.5, stock=3))
    await container.inventory.list_items()

    response = await client.get("/api/v1/cache/stats")

    assert response.status_code == 200
    data = response.json()
    assert data["available"] is True
    by_key = {entry["key"]: entry for entry in data["keys"]}
    assert set(by_key) == set(CacheKey.values())
    assert by_key["inventory-all"]["cached"] is True
    assert by_key["inventory-all"]["count"] == 1
    assert by_key["suppliers-all"]["cached"] is False


async def test_clear_cache(client: AsyncClient, container: ServiceContainer) -> None:
    await container.cache.set(CacheKey.DASHBOARD, {"sales_count": 1}, 60)

    response = await client.delete("/api/v1/cache")

    assert response.status_code == 200
    assert response.json() == {"status": "cleared"}
    assert await container.cache.get(CacheKey.DASHBOARD) is None


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (IdAllocationBusyException("id-allocation", 30.0), 503),
        (ColumnNotFoundException("Sales", "Sale_ID"), 500),
        (ValidationException("bad", field="quantity"), 400),
        (ResourceNotFoundException("item", "ITEM-404"), 404),
        (InsufficientStockException("ITEM-001", 5, 1), 409),
    ],
)
async def test_domain_errors_map_to_status(exc: Exception, status: int) -> None:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise exc

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == status
    assert response.json()["error"] == exc.error_code


async def test_busy_response_suggests_retry() -> None:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/busy")
    async def busy() -> None:
        raise IdAllocationBusyException("id-allocation", 30.0)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/busy")

    assert response.headers["retry-after"] == "1"
    assert response.json()["message"].startswith("System busy")


async def test_exhausted_allocation_suggests_retry() -> None:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/exhausted")
    async def exhausted() -> None:
        raise IdAllocationRetryExhaustedException("SALE", 3, "System busy")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/exhausted")

    assert response.status_code == 503
    assert response.headers["retry-after"] == "1"
    assert response.json()["error"] == "ID_ALLOCATION_FAILED"
