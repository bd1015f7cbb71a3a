"""Tests for Settings validation and defaults."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.id_lock_name == "id-allocation"
    assert settings.id_lock_timeout_seconds == 30.0
    assert settings.id_retry_max_attempts == 3
    assert settings.id_retry_backoff_ms == 500
    assert settings.id_pad_width == 3
    assert settings.cache_ttl_inventory == 180
    assert settings.cache_ttl_customers == 300
    assert settings.cache_ttl_suppliers == 300
    assert settings.cache_ttl_recent_sales == 120
    assert settings.cache_ttl_dashboard == 60
    assert settings.records_backend == "memory"
    assert settings.cache_backend == "memory"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_DASHBOARD", "15")
    monkeypatch.setenv("ID_LOCK_TIMEOUT_SECONDS", "5")
    settings = Settings(_env_file=None)
    assert settings.cache_ttl_dashboard == 15
    assert settings.id_lock_timeout_seconds == 5.0


def test_sql_backend_requires_database_url() -> None:
    with pytest.raises(ValidationError, match="DATABASE_URL"):
        Settings(_env_file=None, records_backend="sql", database_url="")


def test_redis_cache_requires_redis_enabled() -> None:
    with pytest.raises(ValidationError, match="REDIS_ENABLED"):
        Settings(_env_file=None, cache_backend="redis", redis_enabled=False)


@pytest.mark.parametrize(
    "overrides",
    [
        {"records_backend": "sheets"},
        {"cache_backend": "memcached"},
        {"id_lock_timeout_seconds": 0},
        {"id_pad_width": 0},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_app_section_fields() -> None:
    app_fields = {"app_name", "app_version", "debug", "request_id_header"}
    assert app_fields <= set(Settings.model_fields)
    assert not {"shop_name", "currency"} & set(Settings.model_fields)
