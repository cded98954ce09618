"""API router for analytics."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from doease.core.dependencies import CurrentUserDep, SessionDep
from doease.features.analytics.schemas import AnalyticsSummary, TaskFilter
from doease.features.analytics.service import AnalyticsService
from doease.features.tasks.schemas import TaskResponse

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "",
    response_model=AnalyticsSummary,
    summary="Completion statistics",
)
async def get_analytics(user: CurrentUserDep, session: SessionDep) -> AnalyticsSummary:
    return await AnalyticsService(session).summary(user.id)


@router.get(
    "/tasks",
    response_model=list[TaskResponse],
    summary="Tasks behind a statistic",
    description="`high-priority` lists pending high-priority tasks.",
)
async def get_analytics_tasks(
    user: CurrentUserDep,
    session: SessionDep,
    task_filter: Annotated[TaskFilter, Query(alias="filter")] = TaskFilter.TOTAL,
) -> list[TaskResponse]:
    tasks = await AnalyticsService(session).tasks(user.id, task_filter)
    return [TaskResponse.model_validate(task) for task in tasks]
