"""Metrics middleware for HTTP request instrumentation with trace correlation."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

from doease.infra.metrics.prometheus import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request, Response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record request counts, durations and in-progress requests.

    Labels use the route path template ("/api/v1/tasks/{task_id}") so the
    series count stays bounded. When a span is active its trace id is
    attached as an exemplar.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method = request.method
        endpoint = request.url.path
        http_requests_in_progress.labels(method=method, endpoint="*").inc()

        start_time = time.perf_counter()
        status_code = 500  # Default to error in case of exception

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.6f}"
            return response
        finally:
            duration = time.perf_counter() - start_time

            # The route is only known once routing has happened
            route = request.scope.get("route")
            if route is not None and hasattr(route, "path"):
                endpoint = route.path

            span_context = trace.get_current_span().get_span_context()
            exemplar = {"trace_id": format(span_context.trace_id, "032x")} if span_context.is_valid else None

            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                duration, exemplar=exemplar
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc(
                exemplar=exemplar
            )
            http_requests_in_progress.labels(method=method, endpoint="*").dec()
