"""Core database package: declarative base, mixins, and a thin repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - UUIDPKMixin: UUID v4 primary key
    - TimestampMixin: created_at, updated_at tracking
    - UUIDTimestampedBase: UUID PK + timestamps

Repository:
    - BaseRepository[T]: Generic CRUD with explicit session passing

Exceptions:
    - RepositoryError: Base exception for repository operations
    - NotFoundError: Entity not found (404-like)
"""

from doease.core.database.base import (
    NAMING_CONVENTION,
    Base,
    TimestampMixin,
    UUIDPKMixin,
    UUIDTimestampedBase,
)
from doease.core.database.exceptions import NotFoundError, RepositoryError
from doease.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "NotFoundError",
    "RepositoryError",
    "TimestampMixin",
    "UUIDPKMixin",
    "UUIDTimestampedBase",
]
