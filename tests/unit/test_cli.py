"""Tests for the click command tree.

Commands are invoked with Click's CliRunner; the sweep commands run
against a patched ReminderService so no database is needed.
"""

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from doease.cli.main import cli
from doease.features.reminders.schemas import RecipientResult, SweepReport


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.mark.unit
class TestCommandTree:
    def test_help_lists_command_groups(self, cli_runner):
        result = cli_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("server", "jobs", "watch"):
            assert name in result.output

    def test_jobs_help(self, cli_runner):
        result = cli_runner.invoke(cli, ["jobs", "--help"])

        assert result.exit_code == 0
        assert "check-streaks" in result.output
        assert "send-reminders" in result.output

    def test_watch_help(self, cli_runner):
        result = cli_runner.invoke(cli, ["watch", "--help"])

        assert result.exit_code == 0
        assert "--email" in result.output
        assert "--interval" in result.output


@pytest.mark.unit
class TestJobCommands:
    def test_check_streaks_prints_report(self, cli_runner):
        report = SweepReport(
            message="Streak check completed. Sent: 1. Failed: 0.",
            results=[RecipientResult(success=True, email="ada@example.com", message_id="console-1")],
        )
        with (
            patch("doease.cli.commands.jobs.ReminderService") as service_cls,
            patch("doease.cli.commands.jobs.close_database", new=AsyncMock()),
        ):
            service_cls.return_value.run_streak_sweep = AsyncMock(return_value=report)
            result = cli_runner.invoke(cli, ["jobs", "check-streaks"])

        assert result.exit_code == 0, result.output
        assert "Streak check completed. Sent: 1. Failed: 0." in result.output
        assert "ada@example.com" in result.output

    def test_send_reminders_uses_configured_window(self, cli_runner):
        report = SweepReport(message="No tasks to notify.")
        with (
            patch("doease.cli.commands.jobs.ReminderService") as service_cls,
            patch("doease.cli.commands.jobs.close_database", new=AsyncMock()),
        ):
            sweep = AsyncMock(return_value=report)
            service_cls.return_value.run_task_reminder_sweep = sweep
            result = cli_runner.invoke(cli, ["jobs", "send-reminders"])

        assert result.exit_code == 0, result.output
        assert "No tasks to notify." in result.output
        assert sweep.await_args.args[0].total_seconds() == 60
