"""Authentication client protocol definitions.

Any class implementing these methods satisfies AuthClient through
structural subtyping, which keeps test doubles free of mocking libraries.

Implementations:
    - HttpAuthClient: GoTrue-compatible REST auth service over httpx
    - InMemoryAuthClient: development and test double
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from doease.infra.auth.models import AuthSession, AuthUser


@runtime_checkable
class AuthClient(Protocol):
    """Contract for the hosted authentication boundary.

    Example:
        @router.get("/me")
        async def me(user: CurrentUserDep) -> dict:
            return {"id": str(user.id)}

        # Testing
        app.dependency_overrides[get_auth_client] = lambda: InMemoryAuthClient()
    """

    @property
    def mode(self) -> str:
        """Short backend name ("http", "memory") for logs."""
        ...

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuthUser:
        """Create an identity.

        Raises:
            UserAlreadyExistsError: The email is already registered.
        """
        ...

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
        """
        ...

    async def sign_out(self, access_token: str) -> None:
        """Revoke an access token."""
        ...

    async def get_user(self, access_token: str) -> AuthUser:
        """Resolve an access token to its user.

        Raises:
            InvalidTokenError: Token unknown, expired or revoked.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
