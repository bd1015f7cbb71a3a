"""Pytest configuration and fixtures for shopledger.

Unit and service tests run against the in-memory record store, the
in-memory cache backend and process-local locks, all wired through
app.core.container.wire_services. HTTP tests use a fresh create_app()
with that container placed on app.state.
"""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.core.container import ServiceContainer, wire_services
from app.infrastructure.cache import CacheService, MemoryCacheBackend
from app.infrastructure.locking import LocalLockProvider
from app.infrastructure.persistence.repositories import InMemoryRecordStore


class FakeClock:
    """Manually advanced epoch-seconds clock for TTL tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Settings with short lock wait and backoff so failure paths run fast."""
    return Settings(
        _env_file=None,
        id_lock_timeout_seconds=0.2,
        id_retry_backoff_ms=10,
        cache_namespace="test_cache",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def records() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def locks() -> LocalLockProvider:
    return LocalLockProvider()


@pytest.fixture
def cache_backend(clock: FakeClock) -> MemoryCacheBackend:
    return MemoryCacheBackend(clock=clock)


@pytest.fixture
def cache(cache_backend: MemoryCacheBackend, clock: FakeClock, settings: Settings) -> CacheService:
    return CacheService(cache_backend, clock=clock, settings=settings)


@pytest.fixture
def container(
    settings: Settings,
    records: InMemoryRecordStore,
    cache: CacheService,
    locks: LocalLockProvider,
) -> ServiceContainer:
    """All services over the in-memory fixtures above."""
    return wire_services(settings, records, cache, locks)


@pytest.fixture
async def client(container: ServiceContainer) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh FastAPI app (ASGI) using the test container."""
    from app.main import create_app

    app = create_app()
    app.state.container = container
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
