"""Pydantic schemas for profiles."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from doease.core.utils.dates import is_valid_timezone


def _check_timezone(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    if not is_valid_timezone(value):
        msg = f"Unknown IANA timezone: {value}"
        raise ValueError(msg)
    return value


class ProfileResponse(BaseModel):
    """Profile as returned to its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str | None = None
    mobile: str | None = None
    timezone: str | None = None
    current_streak: int = 0
    last_streak_updated: date | None = None
    email_notifications_enabled: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Explicit user edits. Streak fields are not editable."""

    username: str | None = Field(default=None, min_length=1, max_length=100)
    mobile: str | None = Field(default=None, max_length=32)
    timezone: str | None = Field(default=None, max_length=64, description="IANA timezone name")
    email_notifications_enabled: bool | None = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        return _check_timezone(value)
