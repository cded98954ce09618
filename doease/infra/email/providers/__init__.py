"""Email provider implementations."""

from doease.infra.email.providers.base import (
    BaseEmailProvider,
    EmailDeliveryResult,
    EmailProvider,
)
from doease.infra.email.providers.console import ConsoleProvider
from doease.infra.email.providers.factory import build_email_provider
from doease.infra.email.providers.resend import ResendProvider

__all__ = [
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailProvider",
    "ResendProvider",
    "build_email_provider",
]
