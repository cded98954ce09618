"""Repository for user profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from doease.core.database import BaseRepository
from doease.features.profiles.models import Profile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile rows.

    Inherits get/get_or_raise/get_by/list/create/update/delete from
    BaseRepository. Feature-specific queries below.
    """

    def __init__(self) -> None:
        super().__init__(Profile)

    async def get_by_email(self, session: AsyncSession, email: str) -> Profile | None:
        return await self.get_by(session, Profile.email, email)

    async def list_streak_candidates(self, session: AsyncSession) -> Sequence[Profile]:
        """Profiles the streak sweep has to look at.

        Only users with an active streak who accept email notifications.
        """
        stmt = (
            select(Profile)
            .where(Profile.current_streak > 0)
            .where(Profile.email_notifications_enabled.is_(True))
            .order_by(Profile.id)
        )
        result = await session.execute(stmt)
        profiles = result.scalars().all()

        self._lazy.debug(lambda: f"db.list_streak_candidates -> {len(profiles)} profiles")
        return profiles


_profile_repository: ProfileRepository | None = None


def get_profile_repository() -> ProfileRepository:
    """Get the shared ProfileRepository instance."""
    global _profile_repository
    if _profile_repository is None:
        _profile_repository = ProfileRepository()
    return _profile_repository
