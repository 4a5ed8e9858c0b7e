"""Application configuration using Pydantic Settings.

Every field can be set through an environment variable of the same name
(case-insensitive) or a ``.env`` file in the working directory.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """Bookmarks service settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    app_name: str = "Bookmarks API"
    app_env: str = Field(default="development", description="development, test or production")
    debug: bool = False
    log_level: LogLevel | None = Field(
        default=None,
        description="Root log level; DEBUG when debug is on, INFO otherwise",
    )
    host: str = "0.0.0.0"
    port: int = 8000

    # Storage
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/bookmarks",
        description="PostgreSQL URL; sqlite+aiosqlite URLs work for local runs",
    )

    # Caller identity
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Shared secret for HS256 tokens",
    )
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = Field(default=30, gt=0)
    auth_jwks_url: str = Field(
        default="",
        description="JWKS endpoint of the identity provider that signs ES256 tokens",
    )

    # Bookmark enrichment
    metadata_fetch_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds a page fetch may take before the defaults are used",
    )
    metadata_max_bytes: int = Field(
        default=512_000,
        gt=0,
        description="Body bytes scanned for title, description and icon",
    )
    metadata_user_agent: str = "Mozilla/5.0 (compatible; BookmarksBot/1.0)"

    # Rate limits (slowapi limit strings)
    rate_limit_enabled: bool = Field(default=True, description="Turned off in tests")
    rate_limit_read: str = "30/minute"
    rate_limit_write: str = "10/minute"
    rate_limit_fetch: str = "5/minute"

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @field_validator("app_env")
    @classmethod
    def normalize_app_env(cls, v: str) -> str:
        return v.strip().lower()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """``database_url`` with an async driver.

        Hosting providers hand out plain ``postgresql://`` URLs; the async
        engine needs ``postgresql+asyncpg://``.
        """
        for prefix in ("postgresql://", "postgres://"):
            if self.database_url.startswith(prefix):
                return "postgresql+asyncpg://" + self.database_url[len(prefix):]
        return self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uses_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def uses_pooler(self) -> bool:
        """Connecting through a transaction-mode pooler (PgBouncer, Supavisor)."""
        return "pooler" in self.database_url or "pgbouncer" in self.database_url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level
        return "DEBUG" if self.debug else "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
