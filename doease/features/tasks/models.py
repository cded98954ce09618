"""SQLAlchemy models for the tasks feature."""
from __future__ import annotations

import enum
from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from doease.core.database import UUIDTimestampedBase


class TaskPriority(enum.StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Task(UUIDTimestampedBase):
    """A user's task.

    Scheduled tasks carry the ``due_date`` their start/end times were
    combined with at creation.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "end_time IS NULL OR start_time IS NULL OR end_time >= start_time",
            name="end_after_start",
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date(), nullable=True, index=True)
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(
            TaskPriority,
            name="task_priority",
            values_callable=lambda members: [m.value for m in members],
            native_enum=False,
            length=10,
        ),
        default=TaskPriority.LOW,
        nullable=False,
    )
    completed: Mapped[bool] = mapped_column(Boolean(), default=False, nullable=False)
