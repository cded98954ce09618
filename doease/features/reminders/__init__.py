"""Server-side streak and task reminder sweeps."""

from .router import router
from .service import ReminderService

__all__ = [
    "ReminderService",
    "router",
]
