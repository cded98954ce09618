"""Repository for the tasks feature.

Every query is scoped to the owning user; a task addressed through another
user's id does not exist as far as the caller can tell.
"""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING, Literal, NamedTuple

from sqlalchemy import and_, or_, select

from doease.core.database import BaseRepository, NotFoundError
from doease.core.utils.dates import ensure_aware
from doease.features.profiles.models import Profile
from doease.features.tasks.models import Task, TaskPriority

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime, timedelta
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

ReminderKind = Literal["start", "end"]


class DueNotification(NamedTuple):
    """A task whose start or end instant fell inside the sweep window."""

    task: Task
    owner: Profile
    kind: ReminderKind


def _in_window(instant: datetime | None, lower: datetime, upper: datetime) -> bool:
    if instant is None:
        return False
    instant = ensure_aware(instant)
    return lower < instant <= upper


class TaskRepository(BaseRepository[Task]):
    """Repository for Task rows.

    Inherits get/get_or_raise/get_by/list/create/update/delete from
    BaseRepository. Owner-scoped and sweep queries below.
    """

    def __init__(self) -> None:
        super().__init__(Task)

    async def list_for_user(self, session: AsyncSession, user_id: UUID) -> Sequence[Task]:
        """All of the user's tasks, newest first."""
        stmt = (
            select(Task)
            .where(Task.user_id == user_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_for_user: {user_id} -> {len(items)} tasks")
        return items

    async def list_for_date(
        self,
        session: AsyncSession,
        user_id: UUID,
        day: date,
        *,
        incomplete_first: bool = False,
    ) -> Sequence[Task]:
        """The user's tasks due on ``day``.

        Args:
            session: Database session
            user_id: Owner id
            day: Due date to match
            incomplete_first: Day-view ordering, pending tasks before completed ones
        """
        stmt = select(Task).where(Task.user_id == user_id).where(Task.due_date == day)
        if incomplete_first:
            stmt = stmt.order_by(Task.completed.asc(), Task.created_at.desc(), Task.id.desc())
        else:
            stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())

        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_for_date: {user_id} on {day} -> {len(items)} tasks")
        return items

    async def list_filtered(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        completed: bool | None = None,
        priority: TaskPriority | None = None,
    ) -> Sequence[Task]:
        """The user's tasks narrowed by completion state and priority, newest first."""
        stmt = select(Task).where(Task.user_id == user_id)
        if completed is not None:
            stmt = stmt.where(Task.completed.is_(completed))
        if priority is not None:
            stmt = stmt.where(Task.priority == priority)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())

        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_for_user(self, session: AsyncSession, user_id: UUID, task_id: UUID) -> Task:
        """Fetch one of the user's tasks.

        Raises:
            NotFoundError: No such task, or it belongs to someone else.
        """
        stmt = select(Task).where(Task.id == task_id).where(Task.user_id == user_id)
        result = await session.execute(stmt)
        task = result.scalars().first()
        if task is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": "Task",
                    "id": str(task_id),
                    "user_id": str(user_id),
                    "operation": "db.get_for_user",
                },
            )
            raise NotFoundError("Task", {"id": task_id})
        return task

    async def find_due_for_notification(
        self,
        session: AsyncSession,
        now: datetime,
        window: timedelta,
    ) -> list[DueNotification]:
        """Incomplete tasks whose start or end instant falls in ``(now - window, now]``.

        Only owners with email notifications enabled are included. A task
        whose start and end both fall in the window yields two rows.
        """
        upper = ensure_aware(now).astimezone(UTC)
        lower = upper - window

        stmt = (
            select(Task, Profile)
            .join(Profile, Task.user_id == Profile.id)
            .where(Task.completed.is_(False))
            .where(Profile.email_notifications_enabled.is_(True))
            .where(
                or_(
                    and_(Task.start_time > lower, Task.start_time <= upper),
                    and_(Task.end_time > lower, Task.end_time <= upper),
                )
            )
            .order_by(Task.start_time.asc(), Task.id.asc())
        )
        result = await session.execute(stmt)

        rows: list[DueNotification] = []
        for task, owner in result.all():
            if _in_window(task.start_time, lower, upper):
                rows.append(DueNotification(task, owner, "start"))
            if _in_window(task.end_time, lower, upper):
                rows.append(DueNotification(task, owner, "end"))

        self._lazy.debug(
            lambda: f"db.find_due_for_notification: ({lower.isoformat()}, {upper.isoformat()}] -> {len(rows)} rows"
        )
        return rows


_task_repository: TaskRepository | None = None


def get_task_repository() -> TaskRepository:
    """Get the shared TaskRepository instance."""
    global _task_repository
    if _task_repository is None:
        _task_repository = TaskRepository()
    return _task_repository
