"""Pure streak decision logic.

Two events drive the ``(current_streak, last_streak_updated)`` pair:

* completion (a task went from incomplete to complete) can only grow or
  restart the streak, at most once per calendar day;
* the break check (session start, scheduled sweep) can only zero it.

Nothing here touches storage; callers load a ``StreakState``, ask for a
``StreakDecision`` and persist ``decision.state`` when ``decision.changed``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import date, timedelta

from doease.core.utils.dates import day_difference


class StreakAction(enum.StrEnum):
    INCREMENT = "increment"
    RESTART = "restart"
    RESET = "reset"
    NOOP = "noop"


@dataclass(frozen=True, slots=True)
class StreakState:
    current_streak: int = 0
    last_streak_updated: date | None = None

    def __post_init__(self) -> None:
        if self.current_streak < 0:
            msg = "current_streak must be non-negative"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class StreakDecision:
    """Outcome of one engine call: the action taken and the resulting state."""

    action: StreakAction
    previous: StreakState
    state: StreakState

    @property
    def changed(self) -> bool:
        return self.action is not StreakAction.NOOP


def on_completion(state: StreakState, today: date) -> StreakDecision:
    """Apply a task completion that happened on ``today``.

    Same day is a noop, yesterday increments, anything else restarts at 1.
    """
    last = state.last_streak_updated

    if last == today:
        return StreakDecision(StreakAction.NOOP, state, state)

    if last is not None and last == today - timedelta(days=1):
        new_state = StreakState(state.current_streak + 1, today)
        return StreakDecision(StreakAction.INCREMENT, state, new_state)

    return StreakDecision(StreakAction.RESTART, state, StreakState(1, today))


def on_break_check(state: StreakState, today: date, *, clear_date: bool = False) -> StreakDecision:
    """Zero the streak when more than one day has passed since it was last extended.

    Args:
        state: Current streak state.
        today: Calendar date in the owner's timezone.
        clear_date: Also clear ``last_streak_updated`` on reset. The scheduled
            sweep clears it; the session-start check keeps it.
    """
    last = state.last_streak_updated

    if last is None or state.current_streak == 0:
        return StreakDecision(StreakAction.NOOP, state, state)

    if day_difference(today, last) > 1:
        new_state = replace(
            state,
            current_streak=0,
            last_streak_updated=None if clear_date else last,
        )
        return StreakDecision(StreakAction.RESET, state, new_state)

    return StreakDecision(StreakAction.NOOP, state, state)
