"""Unit tests for timezone-aware calendar helpers."""
from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta

import pytest

from doease.core.utils.dates import (
    FixedClock,
    SystemClock,
    calendar_date,
    combine_local,
    day_difference,
    ensure_aware,
    is_valid_timezone,
    resolve_timezone,
    today_in,
)


@pytest.mark.unit
class TestCalendarDate:
    def test_truncates_in_the_given_timezone(self):
        instant = datetime(2024, 1, 4, 3, 0, tzinfo=UTC)

        assert calendar_date(instant, "UTC") == date(2024, 1, 4)
        assert calendar_date(instant, "America/New_York") == date(2024, 1, 3)
        assert calendar_date(instant, "Asia/Tokyo") == date(2024, 1, 4)

    def test_naive_instants_are_utc(self):
        assert calendar_date(datetime(2024, 1, 4, 23, 30), "Asia/Tokyo") == date(2024, 1, 5)

    def test_unknown_timezone_falls_back_to_utc(self):
        instant = datetime(2024, 1, 4, 23, 30, tzinfo=UTC)

        assert calendar_date(instant, "Mars/Olympus_Mons") == date(2024, 1, 4)
        assert calendar_date(instant, None) == date(2024, 1, 4)
        assert calendar_date(instant, "") == date(2024, 1, 4)

    def test_today_in_uses_the_given_instant(self):
        now = datetime(2024, 1, 4, 2, 0, tzinfo=UTC)
        assert today_in("America/Los_Angeles", now) == date(2024, 1, 3)


@pytest.mark.unit
class TestDayDifference:
    def test_plain_dates(self):
        assert day_difference(date(2024, 1, 4), date(2024, 1, 1)) == 3
        assert day_difference(date(2024, 1, 2), date(2024, 1, 1)) == 1
        assert day_difference(date(2024, 1, 1), date(2024, 1, 1)) == 0

    def test_across_month_and_year_boundaries(self):
        assert day_difference(date(2024, 3, 1), date(2024, 2, 28)) == 2
        assert day_difference(date(2024, 1, 1), date(2023, 12, 31)) == 1

    def test_datetimes_round_up(self):
        start = datetime(2024, 1, 1, 23, 0, tzinfo=UTC)

        # 23 hours over midnight still counts as one day
        assert day_difference(start + timedelta(hours=23), start) == 1
        assert day_difference(start + timedelta(days=1), start) == 1
        assert day_difference(start + timedelta(days=1, seconds=1), start) == 2

    def test_mixed_operands_rejected(self):
        with pytest.raises(TypeError):
            day_difference(datetime(2024, 1, 2, tzinfo=UTC), date(2024, 1, 1))


@pytest.mark.unit
class TestTimezoneHelpers:
    def test_is_valid_timezone(self):
        assert is_valid_timezone("Europe/Paris")
        assert not is_valid_timezone("Europe/Atlantis")
        assert not is_valid_timezone(None)
        assert not is_valid_timezone("")

    def test_resolve_timezone_unknown_is_utc(self):
        assert resolve_timezone("Nowhere/Special") is UTC
        assert resolve_timezone(None) is UTC

    def test_combine_local_places_time_in_timezone(self):
        instant = combine_local(date(2024, 1, 4), time(9, 30), "Europe/Paris")

        assert instant is not None
        assert instant.astimezone(UTC) == datetime(2024, 1, 4, 8, 30, tzinfo=UTC)

    def test_combine_local_without_time(self):
        assert combine_local(date(2024, 1, 4), None, "Europe/Paris") is None

    def test_ensure_aware(self):
        naive = datetime(2024, 1, 4, 9, 0)
        aware = datetime(2024, 1, 4, 9, 0, tzinfo=UTC)

        assert ensure_aware(naive) == aware
        assert ensure_aware(aware) is aware


@pytest.mark.unit
class TestClocks:
    def test_system_clock_is_aware(self):
        assert SystemClock().now().tzinfo is not None

    def test_fixed_clock_advance_and_set(self):
        clock = FixedClock(datetime(2024, 1, 4, 9, 0))

        assert clock.now() == datetime(2024, 1, 4, 9, 0, tzinfo=UTC)
        assert clock.advance(minutes=1) == datetime(2024, 1, 4, 9, 1, tzinfo=UTC)

        clock.set(datetime(2024, 2, 1, tzinfo=UTC))
        assert clock.now() == datetime(2024, 2, 1, tzinfo=UTC)
