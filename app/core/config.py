"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend combinations (records, cache) are validated
at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. validate_backends rejects
    unknown backends and a SQL record store without DATABASE_URL.
    """

    # App
    app_name: str = "shopledger"
    app_version: str = "1.0.0"
    debug: bool = False

    # Request tracing
    request_id_header: str = "X-Request-ID"

    # Record tables: "memory" (process-local) or "sql" (SQLAlchemy async)
    records_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False

    # Redis (cache backend and distributed ID lock)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Cache: "memory" or "redis". Keys are namespace:v<version>:<key>.
    cache_backend: str = "memory"
    cache_namespace: str = "shopledger_cache"
    cache_version: int = 1
    cache_ttl_inventory: int = 180
    cache_ttl_customers: int = 300
    cache_ttl_suppliers: int = 300
    cache_ttl_recent_sales: int = 120
    cache_ttl_dashboard: int = 60
    cache_ttl_low_stock: int = 180
    cache_ttl_customer_debt: int = 300

    # ID allocation (one global lock for every prefix)
    id_lock_name: str = "id-allocation"
    id_lock_timeout_seconds: float = 30.0
    id_lock_lease_seconds: float = 60.0
    id_retry_max_attempts: int = 3
    id_retry_backoff_ms: int = 500
    id_pad_width: int = 3

    recent_sales_limit: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate record and cache backend selection.

        - sql: DATABASE_URL required.
        - redis cache: REDIS_ENABLED must be true.
        """
        if self.records_backend == "sql":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when records_backend is 'sql'. "
                    "Set in environment or .env file."
                )
        elif self.records_backend != "memory":
            raise ValueError(
                f"records_backend must be 'memory' or 'sql', got: {self.records_backend!r}"
            )
        if self.cache_backend == "redis":
            if not self.redis_enabled:
                raise ValueError(
                    "cache_backend 'redis' requires REDIS_ENABLED=true."
                )
        elif self.cache_backend != "memory":
            raise ValueError(
                f"Invalid cache_backend '{self.cache_backend}'. "
                "Must be one of: 'memory', 'redis'"
            )
        if self.id_lock_timeout_seconds <= 0:
            raise ValueError("id_lock_timeout_seconds must be positive")
        if self.id_pad_width < 1:
            raise ValueError("id_pad_width must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
