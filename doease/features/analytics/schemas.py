"""Pydantic schemas for analytics."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class TaskFilter(enum.StrEnum):
    TOTAL = "total"
    COMPLETED = "completed"
    PENDING = "pending"
    HIGH_PRIORITY = "high-priority"


class AnalyticsSummary(BaseModel):
    """Completion statistics across all of a user's tasks."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    high_priority_pending: int = 0
    completion_rate: int = Field(default=0, description="Completed share in whole percent")
    current_streak: int = 0
