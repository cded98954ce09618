"""Prometheus metrics infrastructure."""

from doease.infra.metrics.prometheus import (
    REGISTRY,
    email_send_duration_seconds,
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
    job_duration_seconds,
    job_runs_total,
    reminder_emails_total,
    streak_transitions_total,
)

__all__ = [
    "REGISTRY",
    "email_send_duration_seconds",
    "http_request_duration_seconds",
    "http_requests_in_progress",
    "http_requests_total",
    "job_duration_seconds",
    "job_runs_total",
    "reminder_emails_total",
    "streak_transitions_total",
]
