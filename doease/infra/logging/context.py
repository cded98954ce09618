"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so that user ids, job names and request ids are included in every log
message without explicit passing. Each async task gets its own copy.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for current async task/thread.

    All subsequent log calls in this context will automatically include
    these fields in the log record.

    Example:
        ```python
        # In auth dependency
        set_log_context(user_id=str(user.id))

        # In a sweep, per recipient
        set_log_context(job="check_streaks", profile_id=str(profile.id))
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for current async task/thread.

    Usually not needed as context is isolated per request, but useful in
    tests and in sweeps that process many recipients in one task.
    """
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the contextvars log context into LogRecord.

    Applied to the root logger, so all loggers benefit from automatic
    context injection and JSONFormatter picks the fields up as extras.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get()

        for key, value in context.items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)

        return True
