"""Core services module."""

from doease.core.services.base import BaseService

__all__ = ["BaseService"]
