"""Prometheus metrics for the DoEase service."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Custom registry so tests and the /metrics endpoint see only our metrics
REGISTRY = CollectorRegistry()

DEFAULT_LATENCY_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "HTTP requests currently being processed",
    ["method", "endpoint"],
    registry=REGISTRY,
)

# Streak metrics
streak_transitions_total = Counter(
    "streak_transitions_total",
    "Streak state transitions applied to profiles. "
    "source is 'completion', 'session_check' or 'sweep'.",
    ["action", "source"],
    registry=REGISTRY,
)

# Scheduled job metrics
job_runs_total = Counter(
    "job_runs_total",
    "Scheduled sweep invocations by job and outcome",
    ["job", "outcome"],
    registry=REGISTRY,
)

job_duration_seconds = Histogram(
    "job_duration_seconds",
    "Scheduled sweep duration in seconds",
    ["job"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)

reminder_emails_total = Counter(
    "reminder_emails_total",
    "Reminder and streak emails by job and delivery status",
    ["job", "status"],
    registry=REGISTRY,
)

# Email provider metrics
email_send_duration_seconds = Histogram(
    "email_send_duration_seconds",
    "Email provider send latency in seconds",
    ["provider"],
    buckets=DEFAULT_LATENCY_BUCKETS,
    registry=REGISTRY,
)
