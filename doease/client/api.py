"""Async HTTP client for the DoEase API.

Usage:
    async with DoEaseClient("http://localhost:8000/api/v1") as client:
        await client.sign_in("ada@example.com", "secret")
        tasks = await client.list_tasks()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Self

import httpx

from doease.client.models import ClientStreak, ClientTask

if TYPE_CHECKING:
    from types import TracebackType
    from uuid import UUID

logger = logging.getLogger(__name__)


class DoEaseAPIError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class DoEaseClient:
    """Thin httpx wrapper holding one signed-in session."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        timezone: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if timezone:
            headers["X-Timezone"] = timezone
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._token: str | None = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        response = await self._http.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise DoEaseAPIError(response.status_code, str(detail))
        return response

    async def sign_in(self, email: str, password: str) -> str:
        response = await self._request("POST", "/auth/signin", json={"email": email, "password": password})
        self._token = response.json()["access_token"]
        logger.info("Signed in", extra={"operation": "client.sign_in"})
        return self._token

    async def sign_out(self) -> None:
        if self._token is None:
            return
        await self._request("POST", "/auth/signout")
        self._token = None

    async def list_tasks(self) -> list[ClientTask]:
        response = await self._request("GET", "/tasks")
        return [ClientTask.model_validate(item) for item in response.json()]

    async def set_completed(self, task_id: UUID, completed: bool = True) -> ClientStreak:
        response = await self._request(
            "POST",
            f"/tasks/{task_id}/complete",
            json={"completed": completed},
        )
        return ClientStreak.model_validate(response.json()["streak"])

    async def check_streak(self) -> ClientStreak:
        """Session-start break check."""
        response = await self._request("POST", "/streak/check")
        return ClientStreak.model_validate(response.json())

    async def aclose(self) -> None:
        await self._http.aclose()
