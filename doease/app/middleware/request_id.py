"""Request ID middleware for per-request tracking.

This middleware:
1. Takes the request ID from the X-Request-ID header, or generates a UUID
2. Stores it in request.state.request_id
3. Adds it to the logging context
4. Echoes it in the X-Request-ID response header
5. Clears the logging context when the request completes
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from starlette.datastructures import MutableHeaders

from doease.infra.logging import clear_log_context, set_log_context

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class RequestIDMiddleware:
    """Pure ASGI middleware adding a request ID to logs and responses."""

    header_name = "x-request-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name.decode("latin-1").lower() == self.header_name:
                request_id = value.decode("latin-1")[:128]
                break
        request_id = request_id or str(uuid.uuid4())

        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[self.header_name] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            clear_log_context()
