"""Authentication data models shared by every AuthClient implementation."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Identity returned by the auth service for a valid access token."""

    id: UUID = Field(description="User id; also the profile primary key")
    email: str | None = Field(default=None, description="Primary email address")
    user_metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form metadata stored at sign-up (username, mobile, ...)",
    )


class AuthSession(BaseModel):
    """Access token issued by sign-in."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    user: AuthUser
