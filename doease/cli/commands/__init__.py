"""CLI command modules."""

from doease.cli.commands import jobs, server, watch

__all__ = [
    "jobs",
    "server",
    "watch",
]
