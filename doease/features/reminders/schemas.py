"""Response models for the scheduled sweeps."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecipientResult(BaseModel):
    """Outcome for one recipient of a sweep."""

    model_config = ConfigDict(frozen=True)

    success: bool
    email: str | None = None
    profile_id: UUID | None = None
    task_id: UUID | None = None
    kind: str | None = Field(default=None, description="start or end, for task reminders")
    message_id: str | None = None
    error: str | None = None


class SweepReport(BaseModel):
    message: str
    results: list[RecipientResult] = Field(default_factory=list)

    @property
    def sent(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.sent
