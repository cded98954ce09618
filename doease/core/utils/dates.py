"""Timezone-aware calendar helpers.

"Today" is always resolved against an explicit IANA timezone. Unknown or
empty names fall back to UTC.

Example:
    from doease.core.utils.dates import day_difference, today_in

    today = today_in("America/New_York")
    if day_difference(today, profile.last_streak_updated) > 1:
        ...
"""

from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from functools import lru_cache
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86_400


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant.

    Injected wherever "now" matters so tests can pin the wall clock.
    """

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system wall clock (UTC)."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock pinned to a given instant; advance() moves it forward.

    Example:
        clock = FixedClock(datetime(2024, 1, 4, 9, 0, tzinfo=UTC))
        clock.advance(minutes=1)
    """

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = ensure_aware(instant)

    def advance(self, **delta: float) -> datetime:
        self._instant = self._instant + timedelta(**delta)
        return self._instant


def is_valid_timezone(name: str | None) -> bool:
    """Return True when name is a known IANA timezone."""
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


@lru_cache(maxsize=256)
def resolve_timezone(name: str | None) -> tzinfo:
    """Return the ZoneInfo for name, or UTC when it is missing or unknown."""
    if not name:
        return UTC
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "Unknown timezone, falling back to UTC",
            extra={"timezone": name, "operation": "dates.resolve_timezone"},
        )
        return UTC


def ensure_aware(instant: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant


def calendar_date(instant: datetime, timezone: str | None) -> date:
    """Truncate an instant to the calendar date it falls on in timezone."""
    return ensure_aware(instant).astimezone(resolve_timezone(timezone)).date()


def today_in(timezone: str | None, now: datetime | None = None) -> date:
    """Return today's calendar date in timezone."""
    return calendar_date(now or datetime.now(UTC), timezone)


def day_difference(a: date | datetime, b: date | datetime) -> int:
    """Number of calendar days from b to a.

    Plain dates give the exact calendar difference. Datetimes give the
    ceiling of the elapsed time in days: 23 hours counts as 1, one day
    plus any positive remainder counts as 2.
    """
    if isinstance(a, datetime) or isinstance(b, datetime):
        if not (isinstance(a, datetime) and isinstance(b, datetime)):
            msg = "day_difference operands must both be dates or both be datetimes"
            raise TypeError(msg)
        elapsed = (ensure_aware(a) - ensure_aware(b)).total_seconds()
        return math.ceil(elapsed / _SECONDS_PER_DAY)
    return (a - b).days


def combine_local(day: date, at: time | None, timezone: str | None) -> datetime | None:
    """Place a wall-clock time on day in timezone and return the aware instant."""
    if at is None:
        return None
    return datetime.combine(day, at.replace(tzinfo=None), tzinfo=resolve_timezone(timezone))
