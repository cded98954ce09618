"""Scheduled streak and task reminder sweeps.

Both sweeps process recipients one after another, each in its own session
and transaction. A failure while handling one recipient is logged and
recorded in the report; the sweep moves on to the next one.
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import TYPE_CHECKING

from doease.core.services import BaseService
from doease.core.utils.dates import SystemClock
from doease.features.profiles.repository import get_profile_repository
from doease.features.reminders.schemas import RecipientResult, SweepReport
from doease.features.reminders.templates import streak_reset_email, task_reminder_email
from doease.features.streaks.service import StreakService
from doease.features.tasks.repository import get_task_repository
from doease.infra.metrics import job_duration_seconds, job_runs_total, reminder_emails_total

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from doease.core.settings.email import EmailSettings
    from doease.core.utils.dates import Clock
    from doease.infra.email import EmailMessage, EmailProvider

STREAK_JOB = "check_streaks"
REMINDER_JOB = "send_task_reminders"


class ReminderService(BaseService):
    """Runs the two sweeps against durable storage."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        email_provider: EmailProvider,
        *,
        email_settings: EmailSettings | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self._session_factory = session_factory
        self._email = email_provider
        self._email_settings = email_settings
        self._clock = clock or SystemClock()
        self._profiles = get_profile_repository()
        self._tasks = get_task_repository()

    def _warn_public_sender(self) -> None:
        settings = self._email_settings
        if settings is not None and settings.backend == "resend" and settings.sender_uses_public_domain:
            self.logger.critical(
                "Sender address is on a public mailbox domain; the provider will likely "
                "block these emails. Use a verified custom domain.",
                extra={"from_email": str(settings.from_email), "operation": "service.sweep_config"},
            )

    async def _send(self, job: str, message: EmailMessage) -> tuple[bool, str | None, str | None]:
        result = await self._email.send(message)
        reminder_emails_total.labels(job=job, status="sent" if result.success else "failed").inc()
        return result.success, result.message_id, result.error

    def _finish(self, job: str, report: SweepReport, started: float) -> SweepReport:
        job_duration_seconds.labels(job=job).observe(time.perf_counter() - started)
        job_runs_total.labels(job=job, outcome="partial" if report.failed else "success").inc()
        self.logger.info(
            report.message,
            extra={"job": job, "sent": report.sent, "failed": report.failed, "operation": f"job.{job}"},
        )
        return report

    async def run_streak_sweep(self) -> SweepReport:
        """Reset lapsed streaks and email their owners.

        Each candidate is re-read and checked against its own timezone; a
        reset clears ``last_streak_updated`` and is committed before the
        email goes out.
        """
        started = time.perf_counter()
        self._warn_public_sender()

        async with self._session_factory() as session:
            candidates = [p.id for p in await self._profiles.list_streak_candidates(session)]

        self._lazy.debug(lambda: f"streak sweep: {len(candidates)} candidates")

        results: list[RecipientResult] = []
        for profile_id in candidates:
            result = await self._check_one_streak(profile_id)
            if result is not None:
                results.append(result)

        report = SweepReport(message="", results=results)
        report.message = f"Streak check completed. Sent: {report.sent}. Failed: {report.failed}."
        return self._finish(STREAK_JOB, report, started)

    async def _check_one_streak(self, profile_id: UUID) -> RecipientResult | None:
        email: str | None = None
        try:
            async with self._session_factory() as session:
                decision = await StreakService(session, self._clock).check_break(
                    profile_id, clear_date=True, source="sweep"
                )
                if decision is None or not decision.changed:
                    return None

                profile = await self._profiles.get_or_raise(session, profile_id)
                email, username = profile.email, profile.username
                await session.commit()

            if not email:
                return None

            message = streak_reset_email(email, username, decision.previous.current_streak)
            success, message_id, error = await self._send(STREAK_JOB, message)
        except Exception as exc:
            self.logger.exception(
                "Streak sweep failed for profile",
                extra={"profile_id": str(profile_id), "operation": f"job.{STREAK_JOB}"},
            )
            reminder_emails_total.labels(job=STREAK_JOB, status="failed").inc()
            return RecipientResult(success=False, email=email, profile_id=profile_id, error=str(exc))

        return RecipientResult(
            success=success,
            email=email,
            profile_id=profile_id,
            message_id=message_id,
            error=error,
        )

    async def run_task_reminder_sweep(self, window: timedelta | None = None) -> SweepReport:
        """Email start and end reminders for tasks inside the look-back window.

        Args:
            window: Width of ``(now - window, now]``; defaults to 60 seconds,
                matching the sweep period.
        """
        started = time.perf_counter()
        self._warn_public_sender()
        window = window or timedelta(seconds=60)
        now = self._clock.now()

        async with self._session_factory() as session:
            rows = await self._tasks.find_due_for_notification(session, now, window)
            due = [
                (row.task.id, row.task.name, row.owner.email, row.owner.username, row.kind)
                for row in rows
            ]

        if not due:
            return self._finish(REMINDER_JOB, SweepReport(message="No tasks to notify."), started)

        results: list[RecipientResult] = []
        for task_id, task_name, email, username, kind in due:
            if not email or not username:
                continue
            try:
                message = task_reminder_email(email, username, task_name, kind)
                success, message_id, error = await self._send(REMINDER_JOB, message)
            except Exception as exc:
                self.logger.exception(
                    "Task reminder failed",
                    extra={"task_id": str(task_id), "kind": kind, "operation": f"job.{REMINDER_JOB}"},
                )
                reminder_emails_total.labels(job=REMINDER_JOB, status="failed").inc()
                results.append(
                    RecipientResult(success=False, email=email, task_id=task_id, kind=kind, error=str(exc))
                )
                continue

            results.append(
                RecipientResult(
                    success=success,
                    email=email,
                    task_id=task_id,
                    kind=kind,
                    message_id=message_id,
                    error=error,
                )
            )

        report = SweepReport(message="", results=results)
        report.message = f"Task reminder check complete. Sent: {report.sent}. Failed: {report.failed}."
        return self._finish(REMINDER_JOB, report, started)
