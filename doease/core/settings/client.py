"""Settings for the companion client (notification dispatcher, `doease watch`)."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client session configuration.

    Environment variables use CLIENT_ prefix.
    Example: CLIENT_API_BASE_URL=https://doease.example.com/api/v1
    """

    api_base_url: str = Field(
        default="http://localhost:8000/api/v1",
        description="Base URL of the DoEase API",
    )
    poll_interval_seconds: float = Field(
        default=60.0,
        gt=0,
        le=3600,
        description="Dispatcher poll period, also the width of its look-back window",
    )
    request_timeout: float = Field(
        default=10.0,
        ge=1.0,
        le=120.0,
        description="HTTP timeout in seconds",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA timezone reported to the API (X-Timezone header)",
    )

    model_config = SettingsConfigDict(
        env_prefix="CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
