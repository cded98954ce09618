"""Build the configured AuthClient."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doease.infra.auth.http_client import HttpAuthClient
from doease.infra.auth.testing import InMemoryAuthClient

if TYPE_CHECKING:
    from doease.core.settings.auth import AuthSettings
    from doease.infra.auth.protocols import AuthClient

logger = logging.getLogger(__name__)


def build_auth_client(settings: AuthSettings) -> AuthClient:
    """Construct the auth client selected by AUTH_BACKEND."""
    if settings.backend == "http":
        client: AuthClient = HttpAuthClient(
            str(settings.service_url),
            settings.api_key.get_secret_value() if settings.api_key else None,
            timeout=settings.request_timeout,
            verify_ssl=settings.verify_ssl,
        )
    else:
        client = InMemoryAuthClient()

    logger.info("Auth client configured", extra={"auth_mode": client.mode})
    return client
