"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doease.core.settings import get_app_settings
from doease.features.analytics import router as analytics_router
from doease.features.auth import router as auth_router
from doease.features.health import router as health_router
from doease.features.metrics import router as metrics_router
from doease.features.profiles import router as profiles_router
from doease.features.reminders import router as jobs_router
from doease.features.streaks import router as streaks_router
from doease.features.tasks import router as tasks_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from doease.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application."""
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    # Metrics endpoint without prefix (accessible at /metrics)
    app.include_router(metrics_router)
    app.include_router(health_router)

    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(profiles_router, prefix=api_prefix)
    app.include_router(tasks_router, prefix=api_prefix)
    app.include_router(streaks_router, prefix=api_prefix)
    app.include_router(analytics_router, prefix=api_prefix)
    app.include_router(jobs_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
