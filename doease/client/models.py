"""Client-side views of API payloads."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from doease.core.utils.dates import ensure_aware


class ClientTask(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: UUID
    name: str
    due_date: date | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    priority: str = "low"
    completed: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def as_aware(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value) if value is not None else None


class ClientStreak(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current_streak: int = 0
    last_streak_updated: date | None = None
    action: str | None = None
