"""Build the configured email provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doease.core.exceptions import ConfigurationException
from doease.infra.email.providers.console import ConsoleProvider
from doease.infra.email.providers.resend import ResendProvider

if TYPE_CHECKING:
    from doease.core.settings.email import EmailSettings
    from doease.infra.email.providers.base import EmailProvider


def build_email_provider(settings: EmailSettings) -> EmailProvider:
    """Construct the provider selected by EMAIL_BACKEND.

    Raises:
        ConfigurationException: The resend backend lacks its key or sender.
    """
    if settings.backend == "resend":
        if not settings.is_configured or settings.resend_api_key is None:
            msg = "EMAIL_RESEND_API_KEY and EMAIL_FROM_EMAIL must be set for the resend backend"
            raise ConfigurationException(msg, extra={"error": msg, "setting": "EMAIL_RESEND_API_KEY"})
        return ResendProvider(
            settings.resend_api_key.get_secret_value(),
            settings.sender,
            base_url=settings.api_endpoint,
            timeout=settings.timeout,
        )
    return ConsoleProvider(settings.sender)
