"""Completion statistics and filtered task lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doease.core.services import BaseService
from doease.features.analytics.schemas import AnalyticsSummary, TaskFilter
from doease.features.profiles.repository import get_profile_repository
from doease.features.tasks.models import TaskPriority
from doease.features.tasks.repository import get_task_repository
from doease.utils import percent

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from doease.features.tasks.models import Task


def completion_rate(completed: int, total: int) -> int:
    """Rounded completion percentage, 0 when there is nothing to complete."""
    return percent(completed, total)


class AnalyticsService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__()
        self._session = session
        self._tasks = get_task_repository()
        self._profiles = get_profile_repository()

    async def summary(self, user_id: UUID) -> AnalyticsSummary:
        tasks = await self._tasks.list_for_user(self._session, user_id)
        profile = await self._profiles.get(self._session, user_id)

        total = len(tasks)
        completed = sum(1 for task in tasks if task.completed)
        high_pending = sum(
            1 for task in tasks if not task.completed and task.priority == TaskPriority.HIGH
        )
        return AnalyticsSummary(
            total=total,
            completed=completed,
            pending=total - completed,
            high_priority_pending=high_pending,
            completion_rate=completion_rate(completed, total),
            current_streak=profile.current_streak if profile else 0,
        )

    async def tasks(self, user_id: UUID, task_filter: TaskFilter) -> Sequence[Task]:
        """Tasks behind one of the summary figures."""
        match task_filter:
            case TaskFilter.COMPLETED:
                return await self._tasks.list_filtered(self._session, user_id, completed=True)
            case TaskFilter.PENDING:
                return await self._tasks.list_filtered(self._session, user_id, completed=False)
            case TaskFilter.HIGH_PRIORITY:
                return await self._tasks.list_filtered(
                    self._session, user_id, completed=False, priority=TaskPriority.HIGH
                )
            case _:
                return await self._tasks.list_for_user(self._session, user_id)
