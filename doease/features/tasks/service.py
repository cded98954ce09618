"""Business logic for tasks.

Completion is edge-triggered: only a false to true transition reaches the
streak service, and it does so in the caller's unit of work so the
response already reflects the new streak.
"""

from __future__ import annotations

from datetime import UTC, timedelta
from typing import TYPE_CHECKING, Literal

from doease.core.services import BaseService
from doease.core.utils.dates import SystemClock, combine_local, today_in
from doease.features.profiles.service import ProfileService
from doease.features.streaks.service import StreakService
from doease.features.tasks.models import Task
from doease.features.tasks.repository import TaskRepository, get_task_repository
from doease.utils import apply_updates

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from doease.core.utils.dates import Clock
    from doease.features.streaks.engine import StreakState
    from doease.features.tasks.schemas import TaskCreate, TaskUpdate

DayName = Literal["today", "tomorrow"]


def _as_utc(instant: datetime | None) -> datetime | None:
    return instant.astimezone(UTC) if instant is not None else None


class TaskService(BaseService):
    """Owner-scoped task operations."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock | None = None,
        repository: TaskRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._clock = clock or SystemClock()
        self._repository = repository or get_task_repository()
        self._profiles = ProfileService(session)

    async def list_tasks(self, user_id: UUID) -> Sequence[Task]:
        return await self._repository.list_for_user(self._session, user_id)

    async def list_tasks_for_date(self, user_id: UUID, day: date) -> Sequence[Task]:
        return await self._repository.list_for_date(self._session, user_id, day)

    async def resolve_day(self, user_id: UUID, day: DayName) -> date:
        """Calendar date of "today" or "tomorrow" in the owner's timezone."""
        profile = await self._profiles.get(user_id)
        today = today_in(profile.timezone if profile else None, self._clock.now())
        return today + timedelta(days=1) if day == "tomorrow" else today

    async def day_view(self, user_id: UUID, day: DayName) -> tuple[date, Sequence[Task]]:
        """Tasks due on the resolved day, pending first then newest."""
        on = await self.resolve_day(user_id, day)
        tasks = await self._repository.list_for_date(
            self._session, user_id, on, incomplete_first=True
        )
        return on, tasks

    async def create_task(
        self,
        user_id: UUID,
        payload: TaskCreate,
        *,
        email: str | None = None,
    ) -> Task:
        """Create a task, placing its times of day in the owner's timezone."""
        profile = await self._profiles.ensure(user_id, email)

        start_time = end_time = None
        if payload.due_date is not None:
            start_time = combine_local(payload.due_date, payload.start_time, profile.timezone)
            end_time = combine_local(payload.due_date, payload.end_time, profile.timezone)

        task = Task(
            user_id=user_id,
            name=payload.name,
            due_date=payload.due_date,
            start_time=_as_utc(start_time),
            end_time=_as_utc(end_time),
            priority=payload.priority,
            completed=False,
        )
        task = await self._repository.create(self._session, task)

        self.logger.info(
            "Task created",
            extra={
                "task_id": str(task.id),
                "user_id": str(user_id),
                "scheduled": start_time is not None or end_time is not None,
                "operation": "service.create_task",
            },
        )
        return task

    async def update_task(self, user_id: UUID, task_id: UUID, payload: TaskUpdate) -> Task:
        task = await self._repository.get_for_user(self._session, user_id, task_id)
        result = apply_updates(task, payload)
        if result.applied:
            task = await self._repository.update(self._session, task)
            self.logger.info(
                "Task updated",
                extra={
                    "task_id": str(task_id),
                    "fields": sorted(result.changes),
                    "operation": "service.update_task",
                },
            )
        return task

    async def set_completed(
        self,
        user_id: UUID,
        task_id: UUID,
        completed: bool,
    ) -> tuple[Task, StreakState | None]:
        """Set a task's completion flag.

        Returns:
            The task and the owner's streak state after the write.

        Raises:
            NotFoundError: The task does not belong to the user.
        """
        task = await self._repository.get_for_user(self._session, user_id, task_id)
        streaks = StreakService(self._session, self._clock)

        if task.completed == completed:
            self._lazy.debug(lambda: f"task {task_id}: completed already {completed}, noop")
            return task, await streaks.get_state(user_id)

        task.completed = completed
        task = await self._repository.update(self._session, task)
        self.logger.info(
            "Task completion changed",
            extra={
                "task_id": str(task_id),
                "completed": completed,
                "operation": "service.set_completed",
            },
        )

        if not completed:
            return task, await streaks.get_state(user_id)

        decision = await streaks.record_completion(user_id)
        return task, decision.state if decision is not None else None

    async def delete_task(self, user_id: UUID, task_id: UUID) -> None:
        task = await self._repository.get_for_user(self._session, user_id, task_id)
        await self._repository.delete(self._session, task)
