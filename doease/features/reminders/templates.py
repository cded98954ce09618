"""Reminder email content.

Usernames and task names are HTML-escaped before they reach the body.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Literal

from doease.infra.email import EmailMessage

if TYPE_CHECKING:
    from collections.abc import Mapping

STREAK_RESET_SUBJECT = "Your Productivity Streak on DoEase has been Reset"


def streak_reset_email(to: str, username: str, lost_streak: int) -> EmailMessage:
    body = (
        f"<p>Hi {escape(username)},</p>"
        f"<p>It looks like you missed a day, and your productivity streak of {lost_streak} days "
        "has been reset. Don't worry, you can start a new one today!</p>"
        "<p>Complete any task to begin a new streak.</p>"
        "<p>Best,</p>"
        "<p>The DoEase Team</p>"
    )
    return EmailMessage(
        to=[to],
        subject=STREAK_RESET_SUBJECT,
        body_html=body,
        tags={"category": "streak_reset"},
    )


_TASK_TEMPLATES: Mapping[str, tuple[str, str]] = {
    "start": (
        '⏰ Reminder: Task "{name}" is starting soon!',
        "<p>Hi {username},</p>"
        '<p>Just a friendly reminder that your task, <strong>"{name}"</strong>, '
        "is scheduled to begin shortly.</p>"
        "<p>You got this!</p>",
    ),
    "end": (
        '✅ Reminder: Task "{name}" is ending soon!',
        "<p>Hi {username},</p>"
        '<p>Just a friendly reminder that your task, <strong>"{name}"</strong>, '
        "is scheduled to end shortly. Time to wrap things up!</p>"
        "<p>Keep up the great work!</p>",
    ),
}


def task_reminder_email(
    to: str,
    username: str,
    task_name: str,
    kind: Literal["start", "end"],
) -> EmailMessage:
    subject, body = _TASK_TEMPLATES[kind]
    return EmailMessage(
        to=[to],
        subject=subject.format(name=task_name),
        body_html=body.format(name=escape(task_name), username=escape(username)),
        tags={"category": f"task_{kind}"},
    )
