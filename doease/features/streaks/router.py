"""API router for streaks."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from doease.core.dependencies import ClockDep, CurrentUserDep, SessionDep
from doease.features.streaks.schemas import StreakCheckResponse, StreakResponse
from doease.features.streaks.service import StreakService

router = APIRouter(prefix="/streak", tags=["streaks"])

logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=StreakResponse,
    summary="Get current streak",
)
async def get_streak(user: CurrentUserDep, session: SessionDep, clock: ClockDep) -> StreakResponse:
    state = await StreakService(session, clock).get_state(user.id)
    return StreakResponse.from_state(state)


@router.post(
    "/check",
    response_model=StreakCheckResponse,
    summary="Session-start streak check",
    description="Zero the streak if the user skipped a day. The last streak date is kept.",
)
async def check_streak(
    user: CurrentUserDep,
    session: SessionDep,
    clock: ClockDep,
) -> StreakCheckResponse:
    decision = await StreakService(session, clock).check_break(user.id, source="session")
    if decision is not None and decision.changed:
        await session.commit()
    return StreakCheckResponse.from_decision(decision)
