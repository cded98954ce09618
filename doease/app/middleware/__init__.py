"""HTTP middleware configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doease.app.middleware.metrics import MetricsMiddleware
from doease.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI) -> None:
    """Install middleware. The last one added runs first (outermost)."""
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.debug("Middleware configured")


__all__ = ["MetricsMiddleware", "RequestIDMiddleware", "configure_middleware"]
