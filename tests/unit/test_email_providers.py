"""Unit tests for email providers and the provider factory."""
from __future__ import annotations

import json

import httpx
import pytest

from doease.core.exceptions import ConfigurationException
from doease.core.settings.email import EmailSettings
from doease.infra.email import (
    ConsoleProvider,
    EmailMessage,
    ResendProvider,
    build_email_provider,
)


def _message(**overrides) -> EmailMessage:
    data = {
        "to": ["ada@example.com"],
        "subject": "Hello",
        "body_html": "<p>Hi</p>",
        "tags": {"category": "test"},
    }
    data.update(overrides)
    return EmailMessage(**data)


def _resend(handler, sender: str | None = "DoEase <hello@doease.app>") -> ResendProvider:
    return ResendProvider("re_test", sender, transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestResendProvider:
    @pytest.mark.asyncio
    async def test_successful_send(self):
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "re_123"})

        provider = _resend(handler)
        result = await provider.send(_message())
        await provider.aclose()

        assert result.success
        assert result.message_id == "re_123"
        assert result.provider == "resend"
        assert result.duration_ms is not None
        assert captured["url"] == "https://api.resend.com/emails"
        assert captured["auth"] == "Bearer re_test"
        assert captured["body"] == {
            "from": "DoEase <hello@doease.app>",
            "to": ["ada@example.com"],
            "subject": "Hello",
            "html": "<p>Hi</p>",
            "tags": [{"name": "category", "value": "test"}],
        }

    @pytest.mark.asyncio
    async def test_message_sender_overrides_default(self):
        senders: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            senders.append(json.loads(request.content)["from"])
            return httpx.Response(200, json={"id": "re_1"})

        provider = _resend(handler)
        await provider.send(_message(sender="Ops <ops@doease.app>"))
        await provider.aclose()

        assert senders == ["Ops <ops@doease.app>"]

    @pytest.mark.asyncio
    async def test_missing_sender_fails_without_request(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200, json={"id": "never"})

        provider = _resend(handler, sender=None)
        result = await provider.send(_message())
        await provider.aclose()

        assert not result.success
        assert result.error_code == "CONFIGURATION_ERROR"
        assert calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status_code", "error_code"),
        [
            (400, "BAD_REQUEST"),
            (401, "AUTH_FAILED"),
            (403, "FORBIDDEN"),
            (422, "VALIDATION_FAILED"),
            (429, "RATE_LIMITED"),
            (503, "SERVER_ERROR"),
        ],
    )
    async def test_error_responses_are_classified(self, status_code, error_code):
        provider = _resend(lambda request: httpx.Response(status_code, json={"message": "nope"}))
        result = await provider.send(_message())
        await provider.aclose()

        assert not result.success
        assert result.error_code == error_code
        assert "nope" in result.error
        assert result.metadata == {"status_code": status_code}

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        provider = _resend(handler)
        result = await provider.send(_message())
        await provider.aclose()

        assert not result.success
        assert result.error_code == "TIMEOUT"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        provider = _resend(handler)
        result = await provider.send(_message())
        await provider.aclose()

        assert not result.success
        assert result.error_code == "HTTP_ERROR"


@pytest.mark.unit
class TestConsoleProvider:
    @pytest.mark.asyncio
    async def test_always_succeeds(self):
        result = await ConsoleProvider(None).send(_message())

        assert result.success
        assert result.message_id.startswith("console-")


@pytest.mark.unit
class TestBuildEmailProvider:
    def test_console_backend(self):
        provider = build_email_provider(EmailSettings(backend="console"))
        assert isinstance(provider, ConsoleProvider)

    def test_resend_backend(self):
        settings = EmailSettings(
            backend="resend",
            resend_api_key="re_test",
            from_email="hello@doease.app",
        )
        provider = build_email_provider(settings)

        assert isinstance(provider, ResendProvider)
        assert provider.provider_name == "resend"

    def test_resend_backend_without_key(self):
        settings = EmailSettings(backend="resend", resend_api_key=None, from_email="hello@doease.app")

        with pytest.raises(ConfigurationException) as exc_info:
            build_email_provider(settings)

        assert exc_info.value.status_code == 500
        assert exc_info.value.extra["setting"] == "EMAIL_RESEND_API_KEY"


@pytest.mark.unit
class TestEmailSettings:
    def test_sender_formatting(self):
        settings = EmailSettings(from_email="hello@doease.app", from_name="DoEase")
        assert settings.sender == "DoEase <hello@doease.app>"

    def test_no_sender(self):
        assert EmailSettings(from_email=None).sender is None

    def test_public_domain_detection(self):
        assert EmailSettings(from_email="someone@gmail.com").sender_uses_public_domain
        assert not EmailSettings(from_email="hello@doease.app").sender_uses_public_domain
