"""FastAPI dependencies for route handlers.

Central registry: features import dependencies from here rather than
reaching into ``infra`` directly.

Usage:
    from doease.core.dependencies import CurrentUserDep, SessionDep

    @router.get("/tasks")
    async def list_tasks(user: CurrentUserDep, session: SessionDep):
        ...
"""

from doease.core.dependencies.auth import (
    AuthClientDep,
    BearerTokenDep,
    CurrentUserDep,
    get_auth_client,
    get_bearer_token,
    get_current_user,
)
from doease.core.dependencies.clock import ClockDep, get_clock
from doease.core.dependencies.database import (
    SessionDep,
    SessionFactoryDep,
    get_db_session,
    get_session_factory,
)
from doease.core.dependencies.email import EmailProviderDep, get_email_provider

__all__ = [
    "AuthClientDep",
    "BearerTokenDep",
    "ClockDep",
    "CurrentUserDep",
    "EmailProviderDep",
    "SessionDep",
    "SessionFactoryDep",
    "get_auth_client",
    "get_bearer_token",
    "get_clock",
    "get_current_user",
    "get_db_session",
    "get_email_provider",
    "get_session_factory",
]
