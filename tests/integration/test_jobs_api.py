"""Integration tests for the scheduler-only sweep endpoints."""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from doease.core.settings import clear_all_caches
from doease.features.profiles.models import Profile

API = "/api/v1"
SCHEDULER_HEADERS = {"X-Scheduler-Token": "test-secret"}
NOW = datetime(2024, 1, 4, 9, 0, tzinfo=UTC)


@pytest.fixture
def no_scheduler_secret(monkeypatch):
    monkeypatch.delenv("JOBS_SCHEDULER_SECRET", raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.mark.integration
class TestSchedulerVerification:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/jobs/check-streaks", "/jobs/send-task-reminders"])
    async def test_missing_token_rejected(self, client, email_provider, path):
        response = await client.post(f"{API}{path}")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized: This endpoint can only be called by the scheduler."
        assert email_provider.sent == []

    @pytest.mark.asyncio
    async def test_wrong_token_rejected_before_side_effects(
        self, client, session_factory, make_profile, email_provider
    ):
        profile = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))

        response = await client.post(
            f"{API}/jobs/check-streaks",
            headers={"X-Scheduler-Token": "guess"},
        )

        assert response.status_code == 401
        assert response.json()["type"] == "scheduler-unauthorized"
        async with session_factory() as session:
            assert (await session.get(Profile, profile.id)).current_streak == 3
        assert email_provider.sent == []

    @pytest.mark.asyncio
    async def test_unconfigured_secret_is_server_error(self, client, no_scheduler_secret):
        response = await client.post(f"{API}/jobs/check-streaks", headers=SCHEDULER_HEADERS)

        assert response.status_code == 500
        assert response.json()["error"] == "JOBS_SCHEDULER_SECRET is not configured."


@pytest.mark.integration
class TestSweepEndpoints:
    @pytest.mark.asyncio
    async def test_check_streaks(self, client, make_profile, email_provider):
        lapsed = await make_profile(current_streak=3, last_streak_updated=date(2024, 1, 1))

        response = await client.post(f"{API}/jobs/check-streaks", headers=SCHEDULER_HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Streak check completed. Sent: 1. Failed: 0."
        assert body["results"] == [
            {
                "success": True,
                "email": "ada@example.com",
                "profile_id": str(lapsed.id),
                "message_id": "msg-1",
            }
        ]
        assert len(email_provider.sent) == 1

    @pytest.mark.asyncio
    async def test_send_task_reminders(self, client, make_profile, make_task):
        profile = await make_profile()
        task = await make_task(profile.id, name="Standup", start_time=NOW - timedelta(seconds=30))

        response = await client.post(f"{API}/jobs/send-task-reminders", headers=SCHEDULER_HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Task reminder check complete. Sent: 1. Failed: 0."
        assert body["results"][0]["task_id"] == str(task.id)
        assert body["results"][0]["kind"] == "start"

    @pytest.mark.asyncio
    async def test_no_tasks_to_notify(self, client):
        response = await client.post(f"{API}/jobs/send-task-reminders", headers=SCHEDULER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"message": "No tasks to notify.", "results": []}

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_reported(self, client):
        with patch(
            "doease.features.reminders.router.ReminderService.run_streak_sweep",
            new=AsyncMock(side_effect=RuntimeError("database went away")),
        ):
            response = await client.post(f"{API}/jobs/check-streaks", headers=SCHEDULER_HEADERS)

        assert response.status_code == 500
        assert response.json()["type"] == "job-failed"
        assert response.json()["error"] == "database went away"


@pytest.mark.integration
class TestOperationalEndpoints:
    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_readiness(self, client):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    @pytest.mark.asyncio
    async def test_metrics_exposed(self, client, register):
        await register()

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "http_requests_total" in response.text

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/health/live", headers={"X-Request-ID": "req-123"})

        assert response.headers["x-request-id"] == "req-123"
