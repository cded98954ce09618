"""Unit tests for the APScheduler job registration."""
from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from doease.tasks import scheduler, setup_scheduled_jobs
from doease.tasks.scheduler import _run_streak_sweep, _run_task_reminder_sweep


@pytest.fixture
def registered_jobs():
    setup_scheduled_jobs(MagicMock(), MagicMock())
    yield {job.id: job for job in scheduler.get_jobs()}
    scheduler.remove_all_jobs()


@pytest.mark.unit
class TestSetupScheduledJobs:
    def test_registers_both_sweeps(self, registered_jobs):
        assert set(registered_jobs) == {"check_streaks", "send_task_reminders"}
        assert isinstance(registered_jobs["check_streaks"].trigger, CronTrigger)
        assert isinstance(registered_jobs["send_task_reminders"].trigger, IntervalTrigger)

    def test_reminder_window_matches_interval(self, registered_jobs):
        job = registered_jobs["send_task_reminders"]

        assert job.trigger.interval == timedelta(seconds=60)
        assert job.args[1] == timedelta(seconds=60)


@pytest.mark.unit
class TestScheduledRuns:
    @pytest.mark.asyncio
    async def test_failed_sweep_is_logged_not_raised(self, caplog):
        service = MagicMock()
        service.run_streak_sweep = AsyncMock(side_effect=RuntimeError("database went away"))

        await _run_streak_sweep(service)

        assert "Scheduled streak sweep failed" in caplog.text

    @pytest.mark.asyncio
    async def test_reminder_sweep_gets_window(self):
        service = MagicMock()
        service.run_task_reminder_sweep = AsyncMock()

        await _run_task_reminder_sweep(service, timedelta(seconds=60))

        service.run_task_reminder_sweep.assert_awaited_once_with(timedelta(seconds=60))
