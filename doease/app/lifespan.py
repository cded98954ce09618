"""Application lifespan management.

Startup Order:
1. Logging
2. Database (connectivity check, optional create_all)
3. Auth client and email provider, stored on app.state
4. In-process scheduler (only when JOBS_SCHEDULER_ENABLED)

Shutdown Order: reverse of startup.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from doease.core.settings import (
    get_app_settings,
    get_auth_settings,
    get_db_settings,
    get_email_settings,
    get_job_settings,
    get_logging_settings,
)
from doease.infra.auth import build_auth_client
from doease.infra.database import (
    AsyncSessionLocal,
    close_database,
    create_tables,
    init_database,
)
from doease.infra.email import build_email_provider
from doease.infra.logging import setup_logging
from doease.tasks import setup_scheduled_jobs, start_scheduler, stop_scheduler
from doease.utils import RetryError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop the application's services."""
    app_settings = get_app_settings()
    db_settings = get_db_settings()
    job_settings = get_job_settings()

    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
        },
    )

    try:
        await init_database()
    except RetryError:
        if db_settings.startup_require_db:
            raise
        logger.warning("Database unavailable at startup; continuing in degraded mode")
    else:
        if app_settings.create_tables:
            await create_tables()

    app.state.auth_client = build_auth_client(get_auth_settings())
    app.state.email_provider = build_email_provider(get_email_settings())

    if job_settings.scheduler_enabled:
        setup_scheduled_jobs(AsyncSessionLocal, app.state.email_provider)
        await start_scheduler()

    logger.info("Application startup complete")
    try:
        yield
    finally:
        logger.info("Application shutting down")
        if job_settings.scheduler_enabled:
            await stop_scheduler()
        await app.state.email_provider.aclose()
        await app.state.auth_client.aclose()
        await close_database()
        logger.info("Application shutdown complete")
