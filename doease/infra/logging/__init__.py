"""Logging infrastructure.

Structured logging with:
- JSONL format for log aggregation
- Automatic context injection (user_id, job, profile_id, ...)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug messages
- OpenTelemetry trace correlation

Basic usage:
    import logging

    from doease.infra.logging import set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(user_id="8b0c...")
    logger.info("Task completed")  # Includes user_id automatically
"""

from doease.infra.logging.config import configure_logging, setup_logging, shutdown
from doease.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from doease.infra.logging.formatters import JSONFormatter
from doease.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
