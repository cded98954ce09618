"""Resend email provider.

Sends through the Resend HTTP API: ``POST /emails`` with a bearer API key,
answering ``{"id": "..."}`` on success.

Configuration:
    EMAIL_BACKEND=resend
    EMAIL_RESEND_API_KEY=re_xxx
    EMAIL_FROM_EMAIL=hello@doease.app
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from doease.infra.email.providers.base import BaseEmailProvider, EmailDeliveryResult

if TYPE_CHECKING:
    from doease.infra.email.schemas import EmailMessage

logger = logging.getLogger(__name__)


class ResendProvider(BaseEmailProvider):
    """Resend API provider over httpx."""

    SEND_ENDPOINT = "/emails"

    def __init__(
        self,
        api_key: str,
        default_sender: str | None,
        *,
        base_url: str = "https://api.resend.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(default_sender)
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def provider_name(self) -> str:
        return "resend"

    def _build_payload(self, message: EmailMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": self._sender_for(message),
            "to": list(message.to),
            "subject": message.subject,
            "html": message.body_html,
        }
        if message.body_text:
            payload["text"] = message.body_text
        if message.tags:
            payload["tags"] = [{"name": k, "value": v} for k, v in message.tags.items()]
        return payload

    async def _do_send(self, message: EmailMessage) -> EmailDeliveryResult:
        if not self._sender_for(message):
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="No sender address configured",
                error_code="CONFIGURATION_ERROR",
            )

        try:
            response = await self._client.post(self.SEND_ENDPOINT, json=self._build_payload(message))
        except httpx.TimeoutException:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error="Resend API timeout",
                error_code="TIMEOUT",
            )
        except httpx.HTTPError as e:
            return EmailDeliveryResult.failure_result(
                provider=self.provider_name,
                error=f"Resend HTTP error: {e}",
                error_code="HTTP_ERROR",
            )

        if response.is_success:
            body = response.json()
            return EmailDeliveryResult.success_result(
                message_id=body.get("id", "unknown"),
                provider=self.provider_name,
            )

        error_body = response.text
        try:
            error_json = response.json()
            if isinstance(error_json, dict) and error_json.get("message"):
                error_body = error_json["message"]
        except ValueError:
            pass

        return EmailDeliveryResult.failure_result(
            provider=self.provider_name,
            error=f"Resend API error ({response.status_code}): {error_body}",
            error_code=self._classify_http_error(response.status_code),
            metadata={"status_code": response.status_code},
        )

    def _classify_http_error(self, status_code: int) -> str:
        """Classify HTTP status code into error code."""
        if status_code == 401:
            return "AUTH_FAILED"
        if status_code == 403:
            return "FORBIDDEN"
        if status_code == 422:
            return "VALIDATION_FAILED"
        if status_code == 429:
            return "RATE_LIMITED"
        if status_code == 400:
            return "BAD_REQUEST"
        if status_code >= 500:
            return "SERVER_ERROR"
        return "API_ERROR"

    async def aclose(self) -> None:
        await self._client.aclose()
