"""Request context management using contextvars.

Holds request-scoped identifiers (request id, correlation id) so that log
records emitted anywhere during a request, including background tasks
started from it, can be stamped with them.

Usage:
    token = bind_request_context(request_id="abc", correlation_id="abc")
    ...
    reset_request_context(token)
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the identifiers of the current request."""

    request_id: str | None = None
    correlation_id: str | None = None


_request_context: ContextVar[RequestContext] = ContextVar(
    "request_context", default=RequestContext()
)


def bind_request_context(
    request_id: str | None = None, correlation_id: str | None = None
) -> Token[RequestContext]:
    """Set identifiers for the current context; returns a token for reset."""
    return _request_context.set(
        RequestContext(request_id=request_id, correlation_id=correlation_id)
    )


def reset_request_context(token: Token[RequestContext]) -> None:
    _request_context.reset(token)


def get_request_context() -> RequestContext:
    return _request_context.get()
