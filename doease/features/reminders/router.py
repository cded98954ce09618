"""Scheduler-only endpoints for the streak and task reminder sweeps.

The caller presents the shared secret in the ``X-Scheduler-Token`` header.
Verification runs before any other dependency, so a misconfigured or
unauthorized call never touches storage or email.
"""

from __future__ import annotations

import hmac
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, Request

from doease.core.dependencies import ClockDep, EmailProviderDep, SessionFactoryDep
from doease.core.exceptions import AppException, ConfigurationException, UnauthorizedException
from doease.core.settings import get_email_settings, get_job_settings
from doease.features.reminders.schemas import SweepReport
from doease.features.reminders.service import ReminderService

logger = logging.getLogger(__name__)


async def verify_scheduler(request: Request) -> None:
    """Reject callers that do not present the scheduler secret.

    Raises:
        ConfigurationException: No secret is configured (500).
        UnauthorizedException: The header is missing or wrong (401).
    """
    settings = get_job_settings()
    if settings.scheduler_secret is None or not settings.scheduler_secret.get_secret_value():
        msg = "JOBS_SCHEDULER_SECRET is not configured."
        logger.error(msg, extra={"operation": "jobs.verify_scheduler"})
        raise ConfigurationException(msg, extra={"error": msg})

    presented = request.headers.get(settings.token_header, "")
    expected = settings.scheduler_secret.get_secret_value()
    if not hmac.compare_digest(presented.encode(), expected.encode()):
        msg = "Unauthorized: This endpoint can only be called by the scheduler."
        logger.warning(
            "Rejected scheduler call",
            extra={"path": request.url.path, "operation": "jobs.verify_scheduler"},
        )
        raise UnauthorizedException(msg, type="scheduler-unauthorized", extra={"error": msg})


router = APIRouter(prefix="/jobs", tags=["jobs"], dependencies=[Depends(verify_scheduler)])


def _job_failed(job: str, exc: Exception) -> AppException:
    logger.exception(f"General error in {job} job", extra={"job": job, "operation": "jobs.run"})
    return AppException(
        status_code=500,
        detail=f"{job} job failed",
        type="job-failed",
        extra={"error": str(exc)},
    )


def _service(factory: SessionFactoryDep, provider: EmailProviderDep, clock: ClockDep) -> ReminderService:
    return ReminderService(factory, provider, email_settings=get_email_settings(), clock=clock)


@router.post(
    "/check-streaks",
    response_model=SweepReport,
    response_model_exclude_none=True,
    summary="Streak sweep",
    description="Reset lapsed streaks and email their owners.",
)
async def check_streaks(service: ReminderService = Depends(_service)) -> SweepReport:
    try:
        return await service.run_streak_sweep()
    except Exception as exc:
        raise _job_failed("check-streaks", exc) from exc


@router.post(
    "/send-task-reminders",
    response_model=SweepReport,
    response_model_exclude_none=True,
    summary="Task reminder sweep",
    description="Email start and end reminders for tasks that began or ended in the last interval.",
)
async def send_task_reminders(service: ReminderService = Depends(_service)) -> SweepReport:
    window = timedelta(seconds=get_job_settings().reminder_interval_seconds)
    try:
        return await service.run_task_reminder_sweep(window)
    except Exception as exc:
        raise _job_failed("send-task-reminders", exc) from exc
