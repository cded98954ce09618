"""SQLAlchemy models for user profiles."""
from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Date, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from doease.core.database import Base, TimestampMixin


class Profile(Base, TimestampMixin):
    """Per-user profile row, keyed by the auth provider's user id.

    ``(current_streak, last_streak_updated)`` is the streak state shared by
    the completion path and the scheduled sweep.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="current_streak_non_negative"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, comment="Auth provider user id")
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    mobile: Mapped[str | None] = mapped_column(String(32), nullable=True)
    timezone: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        comment="IANA timezone name",
    )
    current_streak: Mapped[int] = mapped_column(Integer(), default=0, server_default="0", nullable=False)
    last_streak_updated: Mapped[date | None] = mapped_column(Date(), nullable=True)
    email_notifications_enabled: Mapped[bool] = mapped_column(
        Boolean(),
        default=True,
        server_default=true(),
        nullable=False,
    )
