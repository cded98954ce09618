"""Authentication infrastructure.

The hosted auth service is reached only through the AuthClient protocol.
"""

from doease.infra.auth.exceptions import (
    AuthError,
    AuthServiceUnavailableError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from doease.infra.auth.factory import build_auth_client
from doease.infra.auth.http_client import HttpAuthClient
from doease.infra.auth.models import AuthSession, AuthUser
from doease.infra.auth.protocols import AuthClient
from doease.infra.auth.testing import InMemoryAuthClient

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthServiceUnavailableError",
    "AuthSession",
    "AuthUser",
    "HttpAuthClient",
    "InMemoryAuthClient",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "UserAlreadyExistsError",
    "build_auth_client",
]
