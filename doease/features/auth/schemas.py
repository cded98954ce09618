"""Pydantic schemas for sign-up and sign-in."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from doease.core.utils.dates import is_valid_timezone


class SignUpRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    mobile: str | None = Field(default=None, max_length=32)
    timezone: str | None = Field(default=None, max_length=64, description="IANA timezone name")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        if value and not is_valid_timezone(value):
            msg = f"Unknown IANA timezone: {value}"
            raise ValueError(msg)
        return value or None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    user_id: UUID
