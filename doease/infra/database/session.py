"""Database engine and session management (SQLAlchemy async)."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from doease.core.settings import get_db_settings
from doease.utils.retry import retry

logger = logging.getLogger(__name__)

db_settings = get_db_settings()


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, enabling foreign keys on SQLite connections.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """
    new_engine = create_async_engine(url, **kwargs)
    if new_engine.dialect.name == "sqlite":

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_sqlite_fks(dbapi_conn: Any, connection_record: Any) -> None:
            _ = connection_record
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by request handlers, sweeps and the CLI."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


engine = build_engine(db_settings.url, **db_settings.engine_kwargs())
AsyncSessionLocal = build_sessionmaker(engine)


def _safe_url() -> str:
    return make_url(db_settings.url).render_as_string(hide_password=True)


@retry(
    max_attempts=db_settings.startup_retry_attempts,
    initial_delay=db_settings.startup_retry_delay,
    max_delay=30.0,
    exponential_base=2.0,
    jitter=True,
    stop_after_delay=db_settings.startup_retry_timeout,
)
async def init_database() -> None:
    """Verify the database is reachable, retrying with exponential backoff.

    Raises:
        RetryError: If unable to connect after all retry attempts.
    """
    logger.info(
        "Initializing database connection with retry",
        extra={
            "max_attempts": db_settings.startup_retry_attempts,
            "initial_delay": db_settings.startup_retry_delay,
        },
    )

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info(
            "Database connection established successfully",
            extra={"url": _safe_url(), "dialect": engine.dialect.name},
        )
    except Exception as e:
        logger.error(
            "Failed to connect to database",
            extra={"url": _safe_url(), "error": str(e)},
        )
        raise


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet.

    Development convenience; deployed databases are migrated with Alembic.
    """
    from doease.core.models import Base

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def close_database() -> None:
    """Dispose the engine during application shutdown."""
    logger.info("Closing database connection")

    try:
        await engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.exception("Error closing database connection", extra={"error": str(e)})
