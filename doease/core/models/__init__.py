"""Database models package.

Import all models here to make them available to Alembic and create_all().
"""

from __future__ import annotations

from doease.core.database import Base
from doease.features.profiles.models import Profile
from doease.features.tasks.models import Task, TaskPriority

__all__ = ["Base", "Profile", "Task", "TaskPriority"]
