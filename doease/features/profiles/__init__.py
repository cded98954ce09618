"""Profiles feature package."""

from .repository import ProfileRepository, get_profile_repository
from .router import router

__all__ = [
    "ProfileRepository",
    "get_profile_repository",
    "router",
]
