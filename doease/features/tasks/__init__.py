"""Tasks feature package."""

from .repository import TaskRepository, get_task_repository
from .router import router

__all__ = [
    "TaskRepository",
    "get_task_repository",
    "router",
]
