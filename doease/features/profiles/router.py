"""API router for the current user's profile."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Header

from doease.core.dependencies import CurrentUserDep, SessionDep
from doease.features.profiles.schemas import ProfileResponse, ProfileUpdate
from doease.features.profiles.service import ProfileService

router = APIRouter(prefix="/profile", tags=["profiles"])

logger = logging.getLogger(__name__)


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get my profile",
    description="Return the caller's profile, or defaults when no row exists yet.",
)
async def get_my_profile(
    user: CurrentUserDep,
    session: SessionDep,
    x_timezone: Annotated[str | None, Header()] = None,
) -> ProfileResponse:
    service = ProfileService(session)
    profile = await service.get(user.id)
    if profile is None:
        return ProfileResponse.model_validate(service.default_for(user.id, user.email))

    if await service.backfill_timezone(profile, x_timezone):
        await session.commit()
    return ProfileResponse.model_validate(profile)


@router.patch(
    "/me",
    response_model=ProfileResponse,
    summary="Update my profile",
)
async def update_my_profile(
    payload: ProfileUpdate,
    user: CurrentUserDep,
    session: SessionDep,
) -> ProfileResponse:
    service = ProfileService(session)
    profile = await service.ensure(user.id, user.email)
    profile = await service.update(profile, payload)
    await session.commit()
    return ProfileResponse.model_validate(profile)
