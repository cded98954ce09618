"""In-memory authentication client.

Implements the AuthClient protocol without an external service. Used as
the development backend (AUTH_BACKEND=memory) and as the test double.

Usage:
    client = InMemoryAuthClient()
    user = await client.sign_up("ada@example.com", "secret", {"username": "ada"})
    session = await client.sign_in("ada@example.com", "secret")

    # Shortcut for tests that don't care about passwords
    token = client.issue_token(user)

    app.dependency_overrides[get_auth_client] = lambda: client
"""

from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import dataclass
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from doease.infra.auth.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from doease.infra.auth.models import AuthSession, AuthUser

logger = logging.getLogger(__name__)


_hasher = PasswordHasher()


@dataclass
class _Account:
    user: AuthUser
    password_hash: str


class InMemoryAuthClient:
    """Process-local identities and opaque bearer tokens."""

    def __init__(self) -> None:
        self._accounts: dict[str, _Account] = {}
        self._tokens: dict[str, AuthUser] = {}

    @property
    def mode(self) -> str:
        return "memory"

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuthUser:
        key = email.strip().lower()
        if key in self._accounts:
            msg = "User already registered"
            raise UserAlreadyExistsError(msg)

        user = AuthUser(id=uuid.uuid4(), email=key, user_metadata=dict(metadata or {}))
        self._accounts[key] = _Account(user, _hasher.hash(password))
        logger.debug("In-memory identity created", extra={"user_id": str(user.id)})
        return user

    async def sign_in(self, email: str, password: str) -> AuthSession:
        msg = "Invalid login credentials"
        account = self._accounts.get(email.strip().lower())
        if account is None:
            raise InvalidCredentialsError(msg)
        try:
            _hasher.verify(account.password_hash, password)
        except (VerificationError, InvalidHashError) as exc:
            raise InvalidCredentialsError(msg) from exc
        return AuthSession(access_token=self.issue_token(account.user), user=account.user)

    async def sign_out(self, access_token: str) -> None:
        if self._tokens.pop(access_token, None) is None:
            msg = "Invalid or expired token"
            raise InvalidTokenError(msg)

    async def get_user(self, access_token: str) -> AuthUser:
        user = self._tokens.get(access_token)
        if user is None:
            msg = "Invalid or expired token"
            raise InvalidTokenError(msg)
        return user

    def issue_token(self, user: AuthUser) -> str:
        """Mint a bearer token for user without a password check."""
        token = secrets.token_urlsafe(32)
        self._tokens[token] = user
        return token

    async def aclose(self) -> None:
        self._tokens.clear()
