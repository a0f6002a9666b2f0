"""Request ID and correlation ID middleware.

Generates or forwards X-Request-ID and X-Correlation-ID, echoes both on the
response, and binds them into the logging context for the whole request
(background tasks started from the request inherit them).
Client-provided values are sanitized (length and character set) to prevent log injection.
Uses raw ASGI (no BaseHTTPMiddleware) so streaming and background tasks are unaffected.
"""

import re
import uuid
from typing import Callable

from app.shared.context import bind_request_context, reset_request_context

ID_MAX_LENGTH = 64
ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(ID_MAX_LENGTH) + r"}$")


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _sanitize(raw: str | None) -> str | None:
    if not raw or not ID_ALLOWED_PATTERN.match(raw.strip()):
        return None
    return raw.strip()


def RequestContextMiddleware(
    app: Callable,
    request_id_header: str = "X-Request-ID",
    correlation_id_header: str = "X-Correlation-ID",
) -> Callable:
    """Attach request and correlation ids to scope state, logs, and the response. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _sanitize(_get_header(scope, request_id_header)) or str(uuid.uuid4())
        correlation_id = _sanitize(_get_header(scope, correlation_id_header)) or request_id
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((request_id_header.encode(), request_id.encode()))
                headers.append((correlation_id_header.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        token = bind_request_context(request_id=request_id, correlation_id=correlation_id)
        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_request_context(token)

    return asgi_app
