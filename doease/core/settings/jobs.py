"""Scheduled job settings.

Provides settings for:
- Scheduler caller verification (shared secret)
- In-process APScheduler toggles
- Streak sweep and reminder sweep timing
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class JobSettings(BaseSettings):
    """Configuration for the streak and reminder sweeps.

    Environment variables use JOBS_ prefix.
    Example: JOBS_SCHEDULER_SECRET=change-me, JOBS_SCHEDULER_ENABLED=true
    """

    scheduler_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret the external scheduler presents in the token header",
    )
    token_header: str = Field(
        default="X-Scheduler-Token",
        description="Header carrying the scheduler secret",
    )

    scheduler_enabled: bool = Field(
        default=False,
        description="Run the sweeps in-process with APScheduler",
    )
    streak_sweep_hour: int = Field(
        default=0,
        ge=0,
        le=23,
        description="UTC hour of the daily streak sweep",
    )
    streak_sweep_minute: int = Field(
        default=5,
        ge=0,
        le=59,
        description="Minute of the daily streak sweep",
    )
    reminder_interval_seconds: int = Field(
        default=60,
        ge=10,
        le=3600,
        description="Reminder sweep period, also the width of its look-back window",
    )

    model_config = SettingsConfigDict(
        env_prefix="JOBS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
