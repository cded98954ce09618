"""Email delivery settings.

Environment variables use EMAIL_ prefix.
Example: EMAIL_BACKEND=resend, EMAIL_RESEND_API_KEY=re_xxx, EMAIL_FROM_EMAIL=hello@doease.app
"""

from __future__ import annotations

from typing import Literal

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Mailbox providers that refuse to let third parties send on their behalf.
PUBLIC_MAIL_DOMAINS = frozenset(
    {"gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "aol.com"}
)


class EmailSettings(BaseSettings):
    """Transactional email configuration.

    Supports two backends:
    - resend: Resend HTTP API (production)
    - console: Log emails instead of sending them (development)
    """

    backend: Literal["resend", "console"] = Field(
        default="console",
        description="Email backend: resend (production), console (dev)",
    )

    resend_api_key: SecretStr | None = Field(
        default=None,
        description="Resend API key",
    )
    api_endpoint: str = Field(
        default="https://api.resend.com",
        description="Base URL of the Resend API",
    )

    from_email: EmailStr | None = Field(
        default=None,
        description="Sender address for reminder and streak emails",
    )
    from_name: str = Field(
        default="DoEase",
        max_length=100,
        description="Sender display name",
    )

    timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="HTTP timeout in seconds for provider calls",
    )

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_configured(self) -> bool:
        """Whether enough configuration exists to send mail.

        The console backend never leaves the process and needs no sender.
        """
        if self.backend == "console":
            return True
        return self.from_email is not None and self.resend_api_key is not None

    @property
    def sender(self) -> str | None:
        """RFC 5322 sender, e.g. ``DoEase <hello@doease.app>``."""
        if not self.from_email:
            return None
        if self.from_name:
            return f"{self.from_name} <{self.from_email}>"
        return str(self.from_email)

    @property
    def sender_uses_public_domain(self) -> bool:
        """Whether the sender sits on a public mailbox domain."""
        if not self.from_email:
            return False
        domain = str(self.from_email).rsplit("@", 1)[-1].lower()
        return domain in PUBLIC_MAIL_DOMAINS
