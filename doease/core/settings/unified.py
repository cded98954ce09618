"""Unified settings composition for convenient access.

This module composes all domain-specific settings into a single object.
It is purely additive and does not replace the modular get_*_settings()
functions.

Usage:
    from doease.core.settings import get_settings

    settings = get_settings()
    print(settings.app.host)
    print(settings.jobs.reminder_interval_seconds)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .client import ClientSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .jobs import JobSettings
from .loader import (
    get_app_settings,
    get_auth_settings,
    get_client_settings,
    get_db_settings,
    get_email_settings,
    get_job_settings,
    get_logging_settings,
)
from .logs import LoggingSettings


class Settings(BaseSettings):
    """Unified settings composing all domain settings.

    Each nested settings class still loads from its own environment prefix
    (APP_, DB_, LOG_, ...), not from a unified prefix.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=get_app_settings)
    db: DatabaseSettings = Field(default_factory=get_db_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)
    email: EmailSettings = Field(default_factory=get_email_settings)
    auth: AuthSettings = Field(default_factory=get_auth_settings)
    jobs: JobSettings = Field(default_factory=get_job_settings)
    client: ClientSettings = Field(default_factory=get_client_settings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get unified settings instance (cached).

    Example:
        from doease.core.settings import get_settings

        settings = get_settings()
        if settings.app.debug:
            print("Debug mode enabled")
    """
    return Settings()
