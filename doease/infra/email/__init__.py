"""Email infrastructure: message model and delivery providers."""

from doease.infra.email.providers import (
    BaseEmailProvider,
    ConsoleProvider,
    EmailDeliveryResult,
    EmailProvider,
    ResendProvider,
    build_email_provider,
)
from doease.infra.email.schemas import EmailMessage

__all__ = [
    "BaseEmailProvider",
    "ConsoleProvider",
    "EmailDeliveryResult",
    "EmailMessage",
    "EmailProvider",
    "ResendProvider",
    "build_email_provider",
]
