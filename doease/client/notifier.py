"""Desktop notification surface."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    async def request_permission(self) -> bool:
        """Ask once for permission to show notifications."""
        ...

    async def show(self, title: str, body: str) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log; always permitted unless told otherwise."""

    def __init__(self, *, granted: bool = True) -> None:
        self._granted = granted

    async def request_permission(self) -> bool:
        return self._granted

    async def show(self, title: str, body: str) -> None:
        logger.info(f"{title}: {body}", extra={"title": title, "operation": "client.notify"})
