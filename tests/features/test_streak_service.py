"""Tests for StreakService against a real (in-memory) database."""
from __future__ import annotations

from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from doease.core.utils.dates import FixedClock
from doease.features.profiles.models import Profile
from doease.features.streaks.engine import StreakAction, StreakState
from doease.features.streaks.service import StreakService


async def _reload(session_factory, profile_id) -> Profile:
    async with session_factory() as session:
        return await session.get(Profile, profile_id)


@pytest.mark.integration
class TestBreakCheck:
    @pytest.mark.asyncio
    async def test_three_day_gap_resets_and_keeps_date(self, session_factory, make_profile, clock):
        profile = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))

        async with session_factory() as session:
            decision = await StreakService(session, clock).check_break(profile.id)
            await session.commit()

        assert decision.action is StreakAction.RESET
        stored = await _reload(session_factory, profile.id)
        assert stored.current_streak == 0
        assert stored.last_streak_updated == date(2024, 1, 1)

    @pytest.mark.asyncio
    async def test_sweep_variant_clears_date(self, session_factory, make_profile, clock):
        profile = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))

        async with session_factory() as session:
            await StreakService(session, clock).check_break(profile.id, clear_date=True, source="sweep")
            await session.commit()

        stored = await _reload(session_factory, profile.id)
        assert stored.current_streak == 0
        assert stored.last_streak_updated is None

    @pytest.mark.asyncio
    async def test_yesterday_then_completion_extends(self, session_factory, make_profile):
        profile = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))
        clock = FixedClock(datetime(2024, 1, 2, 15, 0, tzinfo=UTC))

        async with session_factory() as session:
            service = StreakService(session, clock)
            check = await service.check_break(profile.id)
            completion = await service.record_completion(profile.id)
            await session.commit()

        assert check.action is StreakAction.NOOP
        assert completion.action is StreakAction.INCREMENT
        stored = await _reload(session_factory, profile.id)
        assert (stored.current_streak, stored.last_streak_updated) == (4, date(2024, 1, 2))

    @pytest.mark.asyncio
    async def test_uses_profile_timezone(self, session_factory, make_profile):
        # 05:00 UTC on Jan 3 is still Jan 2 in Los Angeles
        profile = await make_profile(
            timezone="America/Los_Angeles",
            current_streak=2,
            last_streak_updated=date(2024, 1, 1),
        )
        clock = FixedClock(datetime(2024, 1, 3, 5, 0, tzinfo=UTC))

        async with session_factory() as session:
            decision = await StreakService(session, clock).check_break(profile.id)

        assert decision.action is StreakAction.NOOP

    @pytest.mark.asyncio
    async def test_missing_profile_is_noop(self, db_session, clock):
        service = StreakService(db_session, clock)

        assert await service.check_break(uuid4()) is None
        assert await service.record_completion(uuid4()) is None
        assert await service.get_state(uuid4()) is None


@pytest.mark.integration
class TestRecordCompletion:
    @pytest.mark.asyncio
    async def test_first_completion(self, session_factory, make_profile, clock):
        profile = await make_profile()

        async with session_factory() as session:
            decision = await StreakService(session, clock).record_completion(profile.id)
            await session.commit()

        assert decision.state == StreakState(1, date(2024, 1, 4))

    @pytest.mark.asyncio
    async def test_same_day_completion_does_not_double_count(self, session_factory, make_profile, clock):
        profile = await make_profile(current_streak=2, last_streak_updated=date(2024, 1, 3))

        async with session_factory() as session:
            service = StreakService(session, clock)
            first = await service.record_completion(profile.id)
            second = await service.record_completion(profile.id)
            await session.commit()

        assert first.action is StreakAction.INCREMENT
        assert second.action is StreakAction.NOOP
        assert (await _reload(session_factory, profile.id)).current_streak == 3
