"""Pydantic schemas for the tasks feature."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from doease.core.utils.dates import ensure_aware
from doease.features.streaks.schemas import StreakResponse
from doease.features.tasks.models import TaskPriority


def _clean_name(value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        msg = "name must not be blank"
        raise ValueError(msg)
    return value


class TaskCreate(BaseModel):
    """Payload for creating a task.

    ``start_time`` and ``end_time`` are times of day; they are placed on
    ``due_date`` in the owner's timezone.
    """

    name: str = Field(..., min_length=1, max_length=200)
    due_date: date | None = None
    start_time: time | None = Field(default=None, description="Local time of day, e.g. 09:30")
    end_time: time | None = Field(default=None, description="Local time of day, e.g. 10:15")
    priority: TaskPriority = TaskPriority.LOW

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return _clean_name(value)

    @model_validator(mode="after")
    def check_schedule(self) -> TaskCreate:
        if (self.start_time or self.end_time) and self.due_date is None:
            msg = "start_time and end_time require a due_date"
            raise ValueError(msg)
        if self.start_time and self.end_time and self.end_time < self.start_time:
            msg = "end_time must not be before start_time"
            raise ValueError(msg)
        return self


class TaskUpdate(BaseModel):
    """Editable task attributes."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    priority: TaskPriority | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str:
        return _clean_name(value)


class TaskCompletionUpdate(BaseModel):
    completed: bool = True


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    due_date: date | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    priority: TaskPriority
    completed: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def as_aware(cls, value: datetime | None) -> datetime | None:
        # SQLite hands back naive UTC values
        return ensure_aware(value) if value is not None else None


class TaskCompletionResponse(BaseModel):
    """Completion result with the streak as it stands after the write."""

    task: TaskResponse
    streak: StreakResponse


class DayView(BaseModel):
    """Tasks due on one day with progress; serialized with a `date` key."""

    model_config = ConfigDict(populate_by_name=True)

    day: Literal["today", "tomorrow"]
    on: date = Field(alias="date")
    tasks: list[TaskResponse]
    completed: int
    total: int
    progress: int = Field(description="Completed share in whole percent")
