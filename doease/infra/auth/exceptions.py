"""Exceptions raised by AuthClient implementations."""

from __future__ import annotations


class AuthError(Exception):
    """Base class for auth client failures."""


class InvalidCredentialsError(AuthError):
    """Email/password pair rejected."""


class InvalidTokenError(AuthError):
    """Access token missing, expired or unknown."""


class UserAlreadyExistsError(AuthError):
    """Sign-up for an email that already has an identity."""


class AuthServiceUnavailableError(AuthError):
    """Auth service unreachable or answered with a server error."""
