"""APScheduler integration for the streak and task reminder sweeps.

The scheduler runs in the same process as FastAPI and is only started when
``JOBS_SCHEDULER_ENABLED`` is set. Deployments that trigger the sweeps from
an external scheduler through ``/api/v1/jobs/*`` leave it off.

Schedule:
    - streak sweep: daily at JOBS_STREAK_SWEEP_HOUR:JOBS_STREAK_SWEEP_MINUTE UTC
    - task reminder sweep: every JOBS_REMINDER_INTERVAL_SECONDS
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from doease.core.settings import get_email_settings, get_job_settings
from doease.features.reminders.service import ReminderService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from doease.infra.email import EmailProvider

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler(
    timezone="UTC",
    job_defaults={
        "coalesce": True,  # Combine multiple pending executions into one
        "max_instances": 1,  # Only one instance of each job at a time
        "misfire_grace_time": 60,
    },
)


async def _run_streak_sweep(service: ReminderService) -> None:
    try:
        await service.run_streak_sweep()
    except Exception:
        logger.exception("Scheduled streak sweep failed")


async def _run_task_reminder_sweep(service: ReminderService, window: timedelta) -> None:
    try:
        await service.run_task_reminder_sweep(window)
    except Exception:
        logger.exception("Scheduled task reminder sweep failed")


def setup_scheduled_jobs(
    session_factory: async_sessionmaker[AsyncSession],
    email_provider: EmailProvider,
) -> None:
    """Register both sweeps with APScheduler."""
    settings = get_job_settings()
    service = ReminderService(
        session_factory,
        email_provider,
        email_settings=get_email_settings(),
    )

    scheduler.add_job(
        func=_run_streak_sweep,
        args=[service],
        trigger=CronTrigger(hour=settings.streak_sweep_hour, minute=settings.streak_sweep_minute),
        id="check_streaks",
        name="Reset lapsed streaks",
        replace_existing=True,
    )

    scheduler.add_job(
        func=_run_task_reminder_sweep,
        args=[service, timedelta(seconds=settings.reminder_interval_seconds)],
        trigger=IntervalTrigger(seconds=settings.reminder_interval_seconds),
        id="send_task_reminders",
        name="Send task start/end reminders",
        replace_existing=True,
    )

    logger.info(f"Scheduled {len(scheduler.get_jobs())} jobs")


async def start_scheduler() -> None:
    """Start the APScheduler.

    Call during application startup after setup_scheduled_jobs().
    """
    if not scheduler.running:
        scheduler.start()
        logger.info(f"APScheduler started with {len(scheduler.get_jobs())} jobs")
    else:
        logger.warning("APScheduler is already running")


async def stop_scheduler() -> None:
    """Stop the APScheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=True)
        logger.info("APScheduler stopped")
    else:
        logger.debug("APScheduler is not running")

