"""Client-side task start/end notifications.

One asyncio task polls the user's task list every ``interval`` seconds and
raises an alert for each incomplete task whose start or end instant fell in
``(now - window, now]``. A per-dispatcher registry guarantees at most one
alert per task and kind; it is discarded with the dispatcher.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timedelta
from typing import Literal

from doease.client.models import ClientTask
from doease.client.notifier import Notifier
from doease.core.utils.dates import Clock, SystemClock

logger = logging.getLogger(__name__)

AlertKind = Literal["start", "end"]
TaskSource = Callable[[], Awaitable[Sequence[ClientTask]]]

ALERT_TEXT: dict[AlertKind, tuple[str, str]] = {
    "start": ("Task Starting: {name}", "Your task is scheduled to start now. You got this!"),
    "end": ("Task Ending: {name}", "Your task is scheduled to end now. Time to wrap up!"),
}


class SessionSentRegistry:
    """Task ids that already raised a start or end alert in this session."""

    def __init__(self) -> None:
        self._sent: dict[AlertKind, set[str]] = {"start": set(), "end": set()}

    def mark(self, kind: AlertKind, task_id: object) -> bool:
        """Record the alert; False if it was already recorded."""
        key = str(task_id)
        sent = self._sent[kind]
        if key in sent:
            return False
        sent.add(key)
        return True

    def __contains__(self, item: tuple[AlertKind, object]) -> bool:
        kind, task_id = item
        return str(task_id) in self._sent[kind]


class NotificationDispatcher:
    """Polls a task source and raises start/end alerts exactly once."""

    def __init__(
        self,
        source: TaskSource,
        notifier: Notifier,
        *,
        interval: float = 60.0,
        window: timedelta | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._source = source
        self._notifier = notifier
        self._interval = interval
        self._window = window or timedelta(seconds=interval)
        self._clock = clock or SystemClock()
        self._registry = SessionSentRegistry()
        self._task: asyncio.Task[None] | None = None
        self._permission: bool | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def registry(self) -> SessionSentRegistry:
        return self._registry

    async def start(self) -> bool:
        """Request permission once and start polling if granted.

        Returns:
            Whether the polling loop is running.
        """
        if self.running:
            return True
        if self._permission is None:
            self._permission = await self._notifier.request_permission()
        if not self._permission:
            logger.info("Notification permission not granted; dispatcher idle")
            return False

        self._task = asyncio.create_task(self._run(), name="doease-notification-dispatcher")
        logger.info("Notification dispatcher started", extra={"interval": self._interval})
        return True

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Notification dispatcher stopped")

    async def _run(self) -> None:
        while True:
            await self.check_once()
            await asyncio.sleep(self._interval)

    async def check_once(self) -> int:
        """Run one poll; returns the number of alerts raised."""
        try:
            tasks = await self._source()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Failed to fetch tasks for notifications")
            return 0

        now = self._clock.now()
        lower = now - self._window
        raised = 0
        for task in tasks:
            if task.completed:
                continue
            for kind, instant in (("start", task.start_time), ("end", task.end_time)):
                if self._due(instant, lower, now) and self._registry.mark(kind, task.id):
                    await self._alert(kind, task)
                    raised += 1
        return raised

    @staticmethod
    def _due(instant: datetime | None, lower: datetime, now: datetime) -> bool:
        return instant is not None and lower < instant <= now

    async def _alert(self, kind: AlertKind, task: ClientTask) -> None:
        title, body = ALERT_TEXT[kind]
        try:
            await self._notifier.show(title.format(name=task.name), body)
        except Exception:
            logger.exception("Notifier failed", extra={"task_id": str(task.id), "kind": kind})
