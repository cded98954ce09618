"""Unit tests for reminder email content."""
from __future__ import annotations

import pytest

from doease.features.reminders.templates import (
    STREAK_RESET_SUBJECT,
    streak_reset_email,
    task_reminder_email,
)


@pytest.mark.unit
class TestStreakResetEmail:
    def test_content(self):
        message = streak_reset_email("ada@example.com", "ada", 5)

        assert message.to == ["ada@example.com"]
        assert message.subject == STREAK_RESET_SUBJECT
        assert "<p>Hi ada,</p>" in message.body_html
        assert "your productivity streak of 5 days has been reset" in message.body_html
        assert message.tags == {"category": "streak_reset"}

    def test_username_is_escaped(self):
        message = streak_reset_email("ada@example.com", "<script>ada</script>", 2)

        assert "<script>" not in message.body_html
        assert "&lt;script&gt;ada&lt;/script&gt;" in message.body_html


@pytest.mark.unit
class TestTaskReminderEmail:
    def test_start_reminder(self):
        message = task_reminder_email("ada@example.com", "ada", "Write report", "start")

        assert message.subject == '⏰ Reminder: Task "Write report" is starting soon!'
        assert "is scheduled to begin shortly" in message.body_html
        assert '<strong>"Write report"</strong>' in message.body_html
        assert message.tags == {"category": "task_start"}

    def test_end_reminder(self):
        message = task_reminder_email("ada@example.com", "ada", "Write report", "end")

        assert message.subject == '✅ Reminder: Task "Write report" is ending soon!'
        assert "Time to wrap things up!" in message.body_html
        assert message.tags == {"category": "task_end"}

    def test_task_name_escaped_in_body_only(self):
        message = task_reminder_email("ada@example.com", "ada", "Q&A <prep>", "start")

        assert message.subject == '⏰ Reminder: Task "Q&A <prep>" is starting soon!'
        assert "Q&amp;A &lt;prep&gt;" in message.body_html
