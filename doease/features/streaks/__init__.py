"""Streak engine and persistence."""

from .router import router
from .service import StreakService

__all__ = [
    "StreakService",
    "router",
]
