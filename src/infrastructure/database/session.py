"""Async engine and session factory."""

from typing import Any, AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from core.config import Settings, settings


def engine_options(config: Settings) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` under ``config``."""
    options: dict[str, Any] = {"echo": config.debug, "pool_pre_ping": True}
    if config.uses_pooler:
        # Transaction-mode poolers reassign connections between statements,
        # which breaks asyncpg's prepared statement cache.
        options["connect_args"] = {"statement_cache_size": 0}
    return options


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite only enforces ``ON DELETE CASCADE`` with this pragma set."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(config: Settings) -> AsyncEngine:
    engine = create_async_engine(config.async_database_url, **engine_options(config))
    if config.uses_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


engine = build_engine(settings)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()
