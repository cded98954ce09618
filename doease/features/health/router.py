"""Health check endpoints.

- Liveness: /health/live - is the process alive?
- Readiness: /health/ready - can the service reach its database?
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from doease.core.dependencies import SessionDep
from doease.core.settings import get_app_settings

router = APIRouter(prefix="/health", tags=["health"])

logger = logging.getLogger(__name__)


@router.get("/live", summary="Liveness probe")
async def liveness() -> dict[str, str]:
    settings = get_app_settings()
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/ready", summary="Readiness probe")
async def readiness(session: SessionDep, response: Response) -> dict[str, str]:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Readiness check failed", extra={"error": str(exc), "operation": "health.ready"})
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unavailable", "database": "unreachable"}
    return {"status": "ok", "database": "ok"}
