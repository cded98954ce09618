"""In-process scheduling of the sweeps."""

from doease.tasks.scheduler import (
    scheduler,
    setup_scheduled_jobs,
    start_scheduler,
    stop_scheduler,
)

__all__ = [
    "scheduler",
    "setup_scheduled_jobs",
    "start_scheduler",
    "stop_scheduler",
]
