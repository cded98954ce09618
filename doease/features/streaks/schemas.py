"""Pydantic schemas for streak endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from doease.features.streaks.engine import StreakAction, StreakDecision, StreakState


class StreakResponse(BaseModel):
    current_streak: int = 0
    last_streak_updated: date | None = None

    @classmethod
    def from_state(cls, state: StreakState | None) -> StreakResponse:
        if state is None:
            return cls()
        return cls(
            current_streak=state.current_streak,
            last_streak_updated=state.last_streak_updated,
        )


class StreakCheckResponse(StreakResponse):
    """Result of the session-start break check."""

    action: StreakAction = StreakAction.NOOP
    previous_streak: int = 0

    @classmethod
    def from_decision(cls, decision: StreakDecision | None) -> StreakCheckResponse:
        if decision is None:
            return cls()
        return cls(
            action=decision.action,
            previous_streak=decision.previous.current_streak,
            current_streak=decision.state.current_streak,
            last_streak_updated=decision.state.last_streak_updated,
        )
