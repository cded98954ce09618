"""Liveness and readiness probes."""

from .router import router

__all__ = ["router"]
