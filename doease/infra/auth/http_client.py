"""HTTP auth client for a GoTrue-compatible REST service.

Endpoints used (relative to AUTH_SERVICE_URL):
    POST /signup                       create identity
    POST /token?grant_type=password    sign in
    POST /logout                       revoke token
    GET  /user                         resolve token to user

Example:
    client = HttpAuthClient(base_url="https://project.supabase.co/auth/v1", api_key="...")
    session = await client.sign_in("ada@example.com", "secret")
    user = await client.get_user(session.access_token)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from doease.infra.auth.exceptions import (
    AuthError,
    AuthServiceUnavailableError,
    InvalidCredentialsError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from doease.infra.auth.models import AuthSession, AuthUser

logger = logging.getLogger(__name__)


class HttpAuthClient:
    """AuthClient implementation over httpx.

    The underlying AsyncClient is created lazily and kept for the
    application lifetime; aclose() is called from the lifespan shutdown.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        *,
        timeout: float = 10.0,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._verify_ssl = verify_ssl
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def mode(self) -> str:
        return "http"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._api_key:
                headers["apikey"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=self._timeout,
                verify=self._verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        try:
            response = await self._get_client().request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "Auth service request failed",
                extra={"path": path, "error": str(e), "operation": "auth.request"},
            )
            raise AuthServiceUnavailableError(str(e)) from e

        if response.status_code >= 500:
            logger.error(
                "Auth service returned server error",
                extra={"path": path, "status_code": response.status_code, "operation": "auth.request"},
            )
            raise AuthServiceUnavailableError(f"Auth service returned {response.status_code}")
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        for key in ("msg", "error_description", "message", "error"):
            if isinstance(body, dict) and body.get(key):
                return str(body[key])
        return f"HTTP {response.status_code}"

    @staticmethod
    def _parse_user(payload: dict[str, Any]) -> AuthUser:
        # /signup answers with either a bare user or a session wrapping one
        user_data = payload.get("user") or payload
        return AuthUser(
            id=user_data["id"],
            email=user_data.get("email"),
            user_metadata=user_data.get("user_metadata") or {},
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuthUser:
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )
        if response.status_code in (400, 422):
            message = self._error_message(response)
            if "registered" in message.lower() or "exists" in message.lower():
                raise UserAlreadyExistsError(message)
            raise AuthError(message)
        if response.is_error:
            raise AuthError(self._error_message(response))

        user = self._parse_user(response.json())
        logger.info(
            "Identity created",
            extra={"user_id": str(user.id), "operation": "auth.sign_up"},
        )
        return user

    async def sign_in(self, email: str, password: str) -> AuthSession:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401):
            raise InvalidCredentialsError(self._error_message(response))
        if response.is_error:
            raise AuthError(self._error_message(response))

        payload = response.json()
        return AuthSession(
            access_token=payload["access_token"],
            token_type=payload.get("token_type", "bearer"),
            expires_in=payload.get("expires_in"),
            refresh_token=payload.get("refresh_token"),
            user=self._parse_user(payload),
        )

    async def sign_out(self, access_token: str) -> None:
        response = await self._request("POST", "/logout", access_token=access_token)
        if response.status_code in (401, 403):
            raise InvalidTokenError(self._error_message(response))
        if response.is_error:
            raise AuthError(self._error_message(response))

    async def get_user(self, access_token: str) -> AuthUser:
        response = await self._request("GET", "/user", access_token=access_token)
        if response.status_code in (401, 403, 404):
            raise InvalidTokenError(self._error_message(response))
        if response.is_error:
            raise AuthError(self._error_message(response))
        return self._parse_user(response.json())

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
