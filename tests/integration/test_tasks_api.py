"""Integration tests for the task, streak and analytics endpoints."""
from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

API = "/api/v1"


async def _create(client, headers, name="Write report", **fields):
    response = await client.post(f"{API}/tasks", headers=headers, json={"name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestTaskCrud:
    @pytest.mark.asyncio
    async def test_create_and_list(self, client, register):
        user = await register()
        first = await _create(client, user["headers"], "first")
        second = await _create(client, user["headers"], "second", priority="high")

        response = await client.get(f"{API}/tasks", headers=user["headers"])

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [second["id"], first["id"]]
        assert second["priority"] == "high"
        assert first["priority"] == "low"
        assert first["completed"] is False

    @pytest.mark.asyncio
    async def test_scheduled_task_times_use_profile_timezone(self, client, register):
        user = await register(timezone="America/New_York")

        task = await _create(
            client,
            user["headers"],
            due_date="2024-01-04",
            start_time="09:00",
            end_time="09:45",
        )

        assert datetime.fromisoformat(task["start_time"]) == datetime(2024, 1, 4, 14, 0, tzinfo=UTC)
        assert datetime.fromisoformat(task["end_time"]) == datetime(2024, 1, 4, 14, 45, tzinfo=UTC)

    @pytest.mark.asyncio
    async def test_invalid_schedule_rejected(self, client, register):
        user = await register()

        response = await client.post(
            f"{API}/tasks",
            headers=user["headers"],
            json={"name": "x", "due_date": "2024-01-04", "start_time": "10:00", "end_time": "09:00"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, register):
        user = await register()
        task = await _create(client, user["headers"])

        response = await client.patch(
            f"{API}/tasks/{task['id']}",
            headers=user["headers"],
            json={"name": "Rewrite report"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Rewrite report"

        response = await client.delete(f"{API}/tasks/{task['id']}", headers=user["headers"])
        assert response.status_code == 204

        response = await client.get(f"{API}/tasks", headers=user["headers"])
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_tasks_are_owner_scoped(self, client, register):
        ada = await register()
        mallory = await register("mallory@example.com", username="mallory")
        task = await _create(client, ada["headers"])

        response = await client.post(
            f"{API}/tasks/{task['id']}/complete",
            headers=mallory["headers"],
            json={"completed": True},
        )
        assert response.status_code == 404
        assert response.json()["type"] == "not-found"

        response = await client.delete(f"{API}/tasks/{task['id']}", headers=mallory["headers"])
        assert response.status_code == 404

        response = await client.get(f"{API}/tasks", headers=mallory["headers"])
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_blank_name_rejected_on_edit(self, client, register):
        user = await register()
        task = await _create(client, user["headers"])

        response = await client.patch(f"{API}/tasks/{task['id']}", headers=user["headers"], json={"name": "   "})
        assert response.status_code == 422

        response = await client.get(f"{API}/tasks", headers=user["headers"])
        assert response.json()[0]["name"] == "Write report"

    @pytest.mark.asyncio
    async def test_delete_leaves_other_users_tasks_alone(self, client, register):
        ada = await register()
        grace = await register("grace@example.com", username="grace")
        ada_task = await _create(client, ada["headers"], "ada's task")
        grace_tasks = [await _create(client, grace["headers"], name) for name in ("first", "second")]

        response = await client.delete(f"{API}/tasks/{ada_task['id']}", headers=ada["headers"])
        assert response.status_code == 204

        response = await client.get(f"{API}/tasks", headers=grace["headers"])
        assert [t["id"] for t in response.json()] == [grace_tasks[1]["id"], grace_tasks[0]["id"]]
        assert (await client.get(f"{API}/tasks", headers=ada["headers"])).json() == []

    @pytest.mark.asyncio
    async def test_unknown_task(self, client, register):
        user = await register()

        response = await client.patch(f"{API}/tasks/{uuid4()}", headers=user["headers"], json={"name": "x"})

        assert response.status_code == 404


@pytest.mark.integration
class TestCompletionAndStreak:
    @pytest.mark.asyncio
    async def test_first_completion_starts_streak(self, client, register):
        user = await register()
        task = await _create(client, user["headers"])

        response = await client.post(
            f"{API}/tasks/{task['id']}/complete",
            headers=user["headers"],
            json={"completed": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["task"]["completed"] is True
        assert body["streak"] == {"current_streak": 1, "last_streak_updated": "2024-01-04"}

    @pytest.mark.asyncio
    async def test_repeated_completion_does_not_double_count(self, client, register):
        user = await register()
        first = await _create(client, user["headers"], "first")
        second = await _create(client, user["headers"], "second")

        for task_id in (first["id"], first["id"], second["id"]):
            response = await client.post(
                f"{API}/tasks/{task_id}/complete",
                headers=user["headers"],
                json={"completed": True},
            )
            assert response.json()["streak"]["current_streak"] == 1

        response = await client.get(f"{API}/streak", headers=user["headers"])
        assert response.json()["current_streak"] == 1

    @pytest.mark.asyncio
    async def test_completion_on_consecutive_days(self, client, register, clock):
        user = await register()
        first = await _create(client, user["headers"], "first")
        second = await _create(client, user["headers"], "second")

        await client.post(f"{API}/tasks/{first['id']}/complete", headers=user["headers"], json={})
        clock.advance(days=1)
        response = await client.post(f"{API}/tasks/{second['id']}/complete", headers=user["headers"], json={})

        assert response.json()["streak"] == {"current_streak": 2, "last_streak_updated": "2024-01-05"}

    @pytest.mark.asyncio
    async def test_session_check_resets_after_gap(self, client, register, clock):
        user = await register()
        task = await _create(client, user["headers"])
        await client.post(f"{API}/tasks/{task['id']}/complete", headers=user["headers"], json={})

        clock.advance(days=1)
        response = await client.post(f"{API}/streak/check", headers=user["headers"])
        assert response.json()["action"] == "noop"
        assert response.json()["current_streak"] == 1

        clock.advance(days=2)
        response = await client.post(f"{API}/streak/check", headers=user["headers"])
        body = response.json()
        assert body["action"] == "reset"
        assert body["previous_streak"] == 1
        assert body["current_streak"] == 0
        # the session check keeps the date
        assert body["last_streak_updated"] == "2024-01-04"

        response = await client.get(f"{API}/streak", headers=user["headers"])
        assert response.json()["current_streak"] == 0

    @pytest.mark.asyncio
    async def test_streak_without_profile(self, client, auth_client):
        identity = await auth_client.sign_up("ghost@example.com", "secret123")
        headers = {"Authorization": f"Bearer {auth_client.issue_token(identity)}"}

        response = await client.post(f"{API}/streak/check", headers=headers)

        assert response.status_code == 200
        assert response.json()["action"] == "noop"
        assert response.json()["current_streak"] == 0


@pytest.mark.integration
class TestDayView:
    @pytest.mark.asyncio
    async def test_today_view_with_progress(self, client, register):
        user = await register()
        done = await _create(client, user["headers"], "done", due_date="2024-01-04")
        await _create(client, user["headers"], "pending one", due_date="2024-01-04")
        await _create(client, user["headers"], "pending two", due_date="2024-01-04")
        await _create(client, user["headers"], "tomorrow", due_date="2024-01-05")
        await client.post(f"{API}/tasks/{done['id']}/complete", headers=user["headers"], json={})

        response = await client.get(f"{API}/tasks/day/today", headers=user["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["date"] == "2024-01-04"
        assert (body["completed"], body["total"], body["progress"]) == (1, 3, 33)
        assert [t["name"] for t in body["tasks"]] == ["pending two", "pending one", "done"]

    @pytest.mark.asyncio
    async def test_progress_rounds_halves_up(self, client, register):
        user = await register()
        tasks = [await _create(client, user["headers"], f"task {n}", due_date="2024-01-04") for n in range(8)]
        await client.post(f"{API}/tasks/{tasks[0]['id']}/complete", headers=user["headers"], json={})

        response = await client.get(f"{API}/tasks/day/today", headers=user["headers"])
        assert response.json()["progress"] == 13

        response = await client.get(f"{API}/analytics", headers=user["headers"])
        assert response.json()["completion_rate"] == 13

    @pytest.mark.asyncio
    async def test_today_follows_profile_timezone(self, client, register, clock):
        # 12:00 UTC on Jan 4 is already Jan 5 in Kiritimati (UTC+14)
        clock.set(datetime(2024, 1, 4, 12, 0, tzinfo=UTC))
        user = await register(timezone="Pacific/Kiritimati")
        await _create(client, user["headers"], "late", due_date="2024-01-05")

        response = await client.get(f"{API}/tasks/day/today", headers=user["headers"])

        assert response.json()["date"] == "2024-01-05"
        assert response.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_empty_day(self, client, register):
        user = await register()

        response = await client.get(f"{API}/tasks/day/tomorrow", headers=user["headers"])

        body = response.json()
        assert body["date"] == (date(2024, 1, 4) + timedelta(days=1)).isoformat()
        assert (body["total"], body["progress"]) == (0, 0)

    @pytest.mark.asyncio
    async def test_unknown_day_rejected(self, client, register):
        user = await register()

        response = await client.get(f"{API}/tasks/day/yesterday", headers=user["headers"])

        assert response.status_code == 422


@pytest.mark.integration
class TestAnalytics:
    @pytest.mark.asyncio
    async def test_summary_and_filters(self, client, register):
        user = await register()
        done = await _create(client, user["headers"], "done", priority="high")
        urgent = await _create(client, user["headers"], "urgent", priority="high")
        await _create(client, user["headers"], "later")
        await client.post(f"{API}/tasks/{done['id']}/complete", headers=user["headers"], json={})

        response = await client.get(f"{API}/analytics", headers=user["headers"])
        assert response.json() == {
            "total": 3,
            "completed": 1,
            "pending": 2,
            "high_priority_pending": 1,
            "completion_rate": 33,
            "current_streak": 1,
        }

        response = await client.get(f"{API}/analytics/tasks", headers=user["headers"], params={"filter": "high-priority"})
        assert [t["id"] for t in response.json()] == [urgent["id"]]

        response = await client.get(f"{API}/analytics/tasks", headers=user["headers"], params={"filter": "completed"})
        assert [t["id"] for t in response.json()] == [done["id"]]

        response = await client.get(f"{API}/analytics/tasks", headers=user["headers"], params={"filter": "pending"})
        assert len(response.json()) == 2

        response = await client.get(f"{API}/analytics/tasks", headers=user["headers"])
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_empty_summary(self, client, register):
        user = await register()

        response = await client.get(f"{API}/analytics", headers=user["headers"])

        assert response.json()["completion_rate"] == 0
        assert response.json()["total"] == 0
