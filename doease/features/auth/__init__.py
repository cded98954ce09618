"""Sign-up, sign-in and sign-out endpoints."""

from .router import router

__all__ = ["router"]
