"""Authentication provider settings.

Environment variables use AUTH_ prefix.
Example: AUTH_BACKEND=http, AUTH_SERVICE_URL="https://project.supabase.co/auth/v1"
"""

from __future__ import annotations

from typing import Literal

from pydantic import AnyHttpUrl, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Hosted authentication service settings.

    The ``http`` backend talks to a GoTrue-compatible REST service
    (sign-up, password grant, logout, user lookup). The ``memory`` backend
    keeps identities in process and is meant for development and tests.
    """

    backend: Literal["http", "memory"] = Field(
        default="memory",
        description="Auth backend: http (hosted service) or memory (development)",
    )

    service_url: AnyHttpUrl | None = Field(
        default=None,
        description="Base URL of the auth service (e.g., https://project.supabase.co/auth/v1)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Public API key sent as the `apikey` header",
    )

    request_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=60.0,
        description="Request timeout in seconds for auth service calls",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify SSL certificates when calling auth service",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def validate_http_backend(self) -> AuthSettings:
        """The http backend cannot work without a service URL."""
        if self.backend == "http" and self.service_url is None:
            msg = "AUTH_SERVICE_URL must be set when AUTH_BACKEND=http"
            raise ValueError(msg)
        return self
