"""Business logic for profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doease.core.services import BaseService
from doease.core.utils.dates import is_valid_timezone
from doease.features.profiles.models import Profile
from doease.features.profiles.repository import ProfileRepository, get_profile_repository
from doease.utils import apply_updates

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from doease.features.profiles.schemas import ProfileUpdate


class ProfileService(BaseService):
    """Profile reads and explicit user edits.

    Streak fields are only written by the streak service.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: ProfileRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_profile_repository()

    async def get(self, user_id: UUID) -> Profile | None:
        return await self._repository.get(self._session, user_id)

    def default_for(self, user_id: UUID, email: str | None) -> Profile:
        """Unsaved profile used when the row is missing."""
        return Profile(
            id=user_id,
            username=email or str(user_id),
            email=email,
            current_streak=0,
            last_streak_updated=None,
            email_notifications_enabled=True,
        )

    async def create(
        self,
        user_id: UUID,
        *,
        username: str,
        email: str | None,
        mobile: str | None = None,
        timezone: str | None = None,
    ) -> Profile:
        profile = Profile(
            id=user_id,
            username=username,
            email=email,
            mobile=mobile,
            timezone=timezone if is_valid_timezone(timezone) else None,
            current_streak=0,
            email_notifications_enabled=True,
        )
        profile = await self._repository.create(self._session, profile)

        self.logger.info(
            "Profile created",
            extra={"user_id": str(user_id), "operation": "service.create_profile"},
        )
        return profile

    async def ensure(self, user_id: UUID, email: str | None) -> Profile:
        """Return the stored profile, creating it from defaults if missing."""
        profile = await self.get(user_id)
        if profile is None:
            profile = await self._repository.create(self._session, self.default_for(user_id, email))
            self.logger.info(
                "Profile created from defaults",
                extra={"user_id": str(user_id), "operation": "service.ensure_profile"},
            )
        return profile

    async def update(self, profile: Profile, payload: ProfileUpdate) -> Profile:
        # mobile and timezone may be cleared with null; the rest are required columns
        required = {"username", "email_notifications_enabled"}
        result = apply_updates(
            profile,
            payload,
            exclude={name for name in required if getattr(payload, name) is None},
            skip_none=False,
        )
        if not result.applied:
            return profile

        profile = await self._repository.update(self._session, profile)
        self.logger.info(
            "Profile updated",
            extra={
                "user_id": str(profile.id),
                "fields": sorted(result.changes),
                "operation": "service.update_profile",
            },
        )
        return profile

    async def backfill_timezone(self, profile: Profile, timezone: str | None) -> bool:
        """Store the client's timezone when the profile has none yet."""
        if profile.timezone or not is_valid_timezone(timezone):
            return False
        profile.timezone = timezone
        await self._repository.update(self._session, profile)
        self._lazy.debug(lambda: f"profile {profile.id}: timezone backfilled to {timezone}")
        return True
