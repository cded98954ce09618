"""Authentication dependencies.

The AuthClient is built once in the lifespan and stored on ``app.state``.
When the app runs without its lifespan (e.g. an ASGITransport test client)
the client is built lazily from settings on first use.

Usage:
    from doease.core.dependencies.auth import CurrentUserDep

    @router.get("/profile/me")
    async def me(user: CurrentUserDep) -> ProfileResponse:
        ...
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from doease.core.exceptions import ServiceUnavailableException, UnauthorizedException
from doease.core.settings import get_auth_settings
from doease.infra.auth import (
    AuthClient,
    AuthServiceUnavailableError,
    AuthUser,
    InvalidTokenError,
    build_auth_client,
)
from doease.infra.logging import set_log_context

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False, description="Access token issued by /auth/signin")


def get_auth_client(request: Request) -> AuthClient:
    """Return the AuthClient attached to the application."""
    client = getattr(request.app.state, "auth_client", None)
    if client is None:
        client = build_auth_client(get_auth_settings())
        request.app.state.auth_client = client
    return client


AuthClientDep = Annotated[AuthClient, Depends(get_auth_client)]


async def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
) -> str:
    """Extract the bearer token or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException(
            "Missing bearer token",
            type="missing-token",
        )
    return credentials.credentials


BearerTokenDep = Annotated[str, Depends(get_bearer_token)]


async def get_current_user(token: BearerTokenDep, auth_client: AuthClientDep) -> AuthUser:
    """Resolve the bearer token to the authenticated user.

    Raises:
        UnauthorizedException: Token unknown, expired or revoked.
        ServiceUnavailableException: The auth service could not be reached.
    """
    try:
        user = await auth_client.get_user(token)
    except InvalidTokenError as exc:
        logger.info(
            "Rejected bearer token",
            extra={"reason": str(exc), "operation": "auth.get_current_user"},
        )
        raise UnauthorizedException("Invalid or expired token", type="invalid-token") from exc
    except AuthServiceUnavailableError as exc:
        raise ServiceUnavailableException(
            "Authentication service unavailable",
            type="auth-unavailable",
        ) from exc

    set_log_context(user_id=str(user.id))
    return user


CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
