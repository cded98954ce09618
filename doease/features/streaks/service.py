"""Apply streak engine decisions to stored profiles.

Every operation reads the profile, asks the engine for a decision and
writes the new pair only when the decision changed it. Nothing is
committed here; the caller owns the unit of work.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from doease.core.services import BaseService
from doease.core.utils.dates import SystemClock, today_in
from doease.features.profiles.repository import ProfileRepository, get_profile_repository
from doease.features.streaks.engine import (
    StreakDecision,
    StreakState,
    on_break_check,
    on_completion,
)
from doease.infra.metrics import streak_transitions_total

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from doease.core.utils.dates import Clock
    from doease.features.profiles.models import Profile


class StreakService(BaseService):
    """Streak reads and transitions for one session.

    A missing profile row means no active streak: every operation returns
    None without writing.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock | None = None,
        repository: ProfileRepository | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._clock = clock or SystemClock()
        self._repository = repository or get_profile_repository()

    @staticmethod
    def state_of(profile: Profile) -> StreakState:
        return StreakState(profile.current_streak, profile.last_streak_updated)

    async def get_state(self, user_id: UUID) -> StreakState | None:
        profile = await self._repository.get(self._session, user_id)
        if profile is None:
            return None
        return self.state_of(profile)

    async def record_completion(self, user_id: UUID) -> StreakDecision | None:
        """Apply a task completion event for the user.

        Call only on a false to true transition of a task's completed flag.
        """
        profile = await self._repository.get(self._session, user_id)
        if profile is None:
            self._lazy.debug(lambda: f"streak completion for {user_id}: no profile, noop")
            return None

        today = today_in(profile.timezone, self._clock.now())
        decision = on_completion(self.state_of(profile), today)
        await self._persist(profile, decision, source="completion")
        return decision

    async def check_break(
        self,
        user_id: UUID,
        *,
        clear_date: bool = False,
        source: str = "session",
    ) -> StreakDecision | None:
        """Zero the user's streak if it lapsed.

        Args:
            user_id: Profile id.
            clear_date: Also clear ``last_streak_updated`` on reset.
            source: Metric label for the caller ("session", "sweep").
        """
        profile = await self._repository.get(self._session, user_id)
        if profile is None:
            self._lazy.debug(lambda: f"streak check for {user_id}: no profile, noop")
            return None

        today = today_in(profile.timezone, self._clock.now())
        decision = on_break_check(self.state_of(profile), today, clear_date=clear_date)
        await self._persist(profile, decision, source=source)
        return decision

    async def _persist(self, profile: Profile, decision: StreakDecision, *, source: str) -> None:
        streak_transitions_total.labels(action=decision.action.value, source=source).inc()
        if not decision.changed:
            return

        profile.current_streak = decision.state.current_streak
        profile.last_streak_updated = decision.state.last_streak_updated
        await self._repository.update(self._session, profile)

        self.logger.info(
            "Streak updated",
            extra={
                "user_id": str(profile.id),
                "action": decision.action.value,
                "previous_streak": decision.previous.current_streak,
                "current_streak": decision.state.current_streak,
                "source": source,
                "operation": "service.streak_transition",
            },
        )
