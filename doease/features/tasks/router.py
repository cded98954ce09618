"""API router for the tasks feature."""

from __future__ import annotations

import logging
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Response, status

from doease.core.dependencies import ClockDep, CurrentUserDep, SessionDep
from doease.features.streaks.schemas import StreakResponse
from doease.features.tasks.schemas import (
    DayView,
    TaskCompletionResponse,
    TaskCompletionUpdate,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from doease.features.tasks.service import TaskService
from doease.utils import percent

router = APIRouter(prefix="/tasks", tags=["tasks"])

logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=list[TaskResponse],
    summary="List tasks",
    description="Return all of the caller's tasks, newest first.",
)
async def list_tasks(user: CurrentUserDep, session: SessionDep, clock: ClockDep) -> list[TaskResponse]:
    tasks = await TaskService(session, clock).list_tasks(user.id)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
    payload: TaskCreate,
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> TaskResponse:
    task = await TaskService(session, clock).create_task(user.id, payload, email=user.email)
    await session.commit()
    return TaskResponse.model_validate(task)


@router.get(
    "/day/{day}",
    response_model=DayView,
    summary="Today or tomorrow view",
    description="Tasks due on the day in the caller's timezone, pending first, with progress.",
)
async def get_day_view(
    day: Literal["today", "tomorrow"],
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> DayView:
    on, tasks = await TaskService(session, clock).day_view(user.id, day)
    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    return DayView(
        day=day,
        on=on,
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        completed=completed,
        total=total,
        progress=percent(completed, total),
    )


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Edit a task",
)
async def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> TaskResponse:
    task = await TaskService(session, clock).update_task(user.id, task_id, payload)
    await session.commit()
    return TaskResponse.model_validate(task)


@router.post(
    "/{task_id}/complete",
    response_model=TaskCompletionResponse,
    summary="Set completion",
    description="Mark a task complete or incomplete. Completing a task may extend the streak.",
)
async def set_task_completed(
    task_id: UUID,
    payload: TaskCompletionUpdate,
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> TaskCompletionResponse:
    task, streak = await TaskService(session, clock).set_completed(user.id, task_id, payload.completed)
    await session.commit()
    return TaskCompletionResponse(
        task=TaskResponse.model_validate(task),
        streak=StreakResponse.from_state(streak),
    )


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: UUID,
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> Response:
    await TaskService(session, clock).delete_task(user.id, task_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
