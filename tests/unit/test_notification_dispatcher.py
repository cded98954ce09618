"""Unit tests for the client-side notification dispatcher."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from doease.client import ClientTask, LoggingNotifier, NotificationDispatcher, SessionSentRegistry
from doease.core.utils.dates import FixedClock

NOW = datetime(2024, 1, 4, 9, 0, tzinfo=UTC)


class RecordingNotifier:
    def __init__(self, *, granted: bool = True) -> None:
        self.granted = granted
        self.permission_requests = 0
        self.shown: list[tuple[str, str]] = []

    async def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.granted

    async def show(self, title: str, body: str) -> None:
        self.shown.append((title, body))


def _task(name: str = "Write report", **kwargs) -> ClientTask:
    return ClientTask(id=uuid4(), name=name, **kwargs)


def _source(tasks: list[ClientTask]):
    async def fetch() -> list[ClientTask]:
        return tasks

    return fetch


@pytest.mark.unit
class TestSessionSentRegistry:
    def test_mark_once_per_kind(self):
        registry = SessionSentRegistry()
        task_id = uuid4()

        assert registry.mark("start", task_id)
        assert not registry.mark("start", task_id)
        assert registry.mark("end", task_id)
        assert ("start", task_id) in registry


@pytest.mark.unit
class TestCheckOnce:
    @pytest.mark.asyncio
    async def test_start_alert_raised_once(self):
        task = _task(start_time=NOW - timedelta(seconds=30))
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(_source([task]), notifier, interval=60, clock=FixedClock(NOW))

        assert await dispatcher.check_once() == 1
        assert await dispatcher.check_once() == 0
        assert notifier.shown == [
            ("Task Starting: Write report", "Your task is scheduled to start now. You got this!")
        ]

    @pytest.mark.asyncio
    async def test_start_and_end_in_same_window(self):
        task = _task(start_time=NOW - timedelta(seconds=50), end_time=NOW)
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(_source([task]), notifier, interval=60, clock=FixedClock(NOW))

        assert await dispatcher.check_once() == 2
        assert [title for title, _ in notifier.shown] == [
            "Task Starting: Write report",
            "Task Ending: Write report",
        ]

    @pytest.mark.asyncio
    async def test_window_bounds(self):
        on_lower_bound = _task("lower", start_time=NOW - timedelta(seconds=60))
        on_upper_bound = _task("upper", start_time=NOW)
        in_future = _task("future", start_time=NOW + timedelta(seconds=1))
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(
            _source([on_lower_bound, on_upper_bound, in_future]),
            notifier,
            interval=60,
            clock=FixedClock(NOW),
        )

        assert await dispatcher.check_once() == 1
        assert notifier.shown[0][0] == "Task Starting: upper"

    @pytest.mark.asyncio
    async def test_completed_and_unscheduled_tasks_ignored(self):
        tasks = [
            _task("done", start_time=NOW - timedelta(seconds=10), completed=True),
            _task("someday"),
        ]
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(_source(tasks), notifier, clock=FixedClock(NOW))

        assert await dispatcher.check_once() == 0
        assert notifier.shown == []

    @pytest.mark.asyncio
    async def test_alert_follows_clock_into_window(self):
        task = _task(end_time=NOW + timedelta(seconds=90))
        clock = FixedClock(NOW)
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(_source([task]), notifier, interval=60, clock=clock)

        assert await dispatcher.check_once() == 0
        clock.advance(seconds=60)
        assert await dispatcher.check_once() == 0
        clock.advance(seconds=60)
        assert await dispatcher.check_once() == 1
        clock.advance(seconds=60)
        assert await dispatcher.check_once() == 0

    @pytest.mark.asyncio
    async def test_source_failure_is_contained(self):
        async def failing() -> list[ClientTask]:
            msg = "API down"
            raise ConnectionError(msg)

        dispatcher = NotificationDispatcher(failing, RecordingNotifier(), clock=FixedClock(NOW))

        assert await dispatcher.check_once() == 0

    @pytest.mark.asyncio
    async def test_naive_api_times_treated_as_utc(self):
        task = ClientTask.model_validate(
            {"id": str(uuid4()), "name": "naive", "start_time": "2024-01-04T08:59:30"}
        )
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(_source([task]), notifier, clock=FixedClock(NOW))

        assert await dispatcher.check_once() == 1


@pytest.mark.unit
class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_runs_loop_and_stop_cancels(self):
        task = _task(start_time=NOW - timedelta(seconds=5))
        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(
            _source([task]),
            notifier,
            interval=0.01,
            window=timedelta(seconds=60),
            clock=FixedClock(NOW),
        )

        assert await dispatcher.start()
        assert dispatcher.running
        await asyncio.sleep(0.05)
        await dispatcher.stop()

        assert not dispatcher.running
        # many polls, one alert
        assert len(notifier.shown) == 1

    @pytest.mark.asyncio
    async def test_no_alert_after_stop(self):
        clock = FixedClock(NOW)
        later = _task("Later", start_time=NOW + timedelta(seconds=30))
        polls = 0

        async def fetch() -> list[ClientTask]:
            nonlocal polls
            polls += 1
            return [later]

        notifier = RecordingNotifier()
        dispatcher = NotificationDispatcher(
            fetch,
            notifier,
            interval=0.01,
            window=timedelta(seconds=60),
            clock=clock,
        )
        assert await dispatcher.start()
        await asyncio.sleep(0.03)
        await dispatcher.stop()
        polls_at_stop = polls

        # the task's start is now inside the window, but the loop is gone
        clock.advance(seconds=31)
        await asyncio.sleep(0.05)

        assert notifier.shown == []
        assert polls == polls_at_stop
        assert not dispatcher.running

    @pytest.mark.asyncio
    async def test_denied_permission_keeps_dispatcher_idle(self):
        notifier = RecordingNotifier(granted=False)
        dispatcher = NotificationDispatcher(_source([]), notifier, clock=FixedClock(NOW))

        assert not await dispatcher.start()
        assert not await dispatcher.start()
        assert not dispatcher.running
        assert notifier.permission_requests == 1

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        dispatcher = NotificationDispatcher(_source([]), LoggingNotifier(), clock=FixedClock(NOW))
        await dispatcher.stop()
        assert not dispatcher.running
