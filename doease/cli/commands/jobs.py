"""Run the streak and task reminder sweeps once from the command line.

Useful for cron-style deployments and for checking email configuration.
"""

from __future__ import annotations

import sys
from datetime import timedelta

import click

from doease.cli.utils import coro, detail, error, header, info, success, warning
from doease.core.exceptions import ConfigurationException
from doease.core.settings import get_email_settings, get_job_settings
from doease.features.reminders.schemas import SweepReport
from doease.features.reminders.service import ReminderService
from doease.infra.database import AsyncSessionLocal, close_database
from doease.infra.email import build_email_provider


@click.group(name="jobs")
def jobs() -> None:
    """Scheduled sweep commands."""


def _print_report(report: SweepReport) -> None:
    for result in report.results:
        target = result.profile_id or result.task_id
        if result.success:
            success(f"{result.email} ({target}) message_id={result.message_id}")
        else:
            warning(f"{result.email} ({target}) failed: {result.error}")
    header(report.message)
    detail("sent", report.sent)
    detail("failed", report.failed)


async def _run(kind: str) -> SweepReport:
    settings = get_email_settings()
    try:
        provider = build_email_provider(settings)
    except ConfigurationException as exc:
        error(exc.detail)
        sys.exit(1)

    service = ReminderService(AsyncSessionLocal, provider, email_settings=settings)
    try:
        if kind == "streaks":
            return await service.run_streak_sweep()
        window = timedelta(seconds=get_job_settings().reminder_interval_seconds)
        return await service.run_task_reminder_sweep(window)
    finally:
        await provider.aclose()
        await close_database()


@jobs.command(name="check-streaks")
@coro
async def check_streaks() -> None:
    """Reset lapsed streaks and email their owners."""
    info("Running streak sweep...")
    _print_report(await _run("streaks"))


@jobs.command(name="send-reminders")
@coro
async def send_reminders() -> None:
    """Email reminders for tasks starting or ending in the last interval."""
    info("Running task reminder sweep...")
    _print_report(await _run("reminders"))
