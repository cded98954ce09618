"""CLI utilities for running async operations and formatting output."""

from doease.cli.utils.async_runner import coro
from doease.cli.utils.formatters import (
    detail,
    error,
    header,
    info,
    success,
    warning,
)

__all__ = [
    "coro",
    "detail",
    "error",
    "header",
    "info",
    "success",
    "warning",
]
