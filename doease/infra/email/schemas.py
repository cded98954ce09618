"""Email message model."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class EmailMessage(BaseModel):
    """A single transactional email.

    Example:
        message = EmailMessage(
            to=["ada@example.com"],
            subject="Your Productivity Streak on DoEase has been Reset",
            body_html="<p>Hi Ada,</p>...",
        )
    """

    to: list[EmailStr] = Field(min_length=1, description="Recipients")
    subject: str = Field(min_length=1, max_length=500, description="Subject line")
    body_html: str = Field(min_length=1, description="HTML body")
    body_text: str | None = Field(default=None, description="Plain text alternative")
    sender: str | None = Field(
        default=None,
        description="RFC 5322 sender; falls back to the provider default",
    )
    tags: dict[str, str] = Field(
        default_factory=dict,
        description="Provider tags for analytics (e.g., {'category': 'task_reminder'})",
    )
