"""Request tracing for error reports.

Every request gets an ID that ends up in three places: the structlog
context (so handler logs carry it), ``request.state.request_id`` (so the
error handlers can stamp it on envelopes, including 500 replies built
outside this middleware) and the X-Request-ID response header.
"""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Longer client-supplied IDs are replaced rather than echoed into logs.
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(request: Request) -> str:
    """Use the caller's X-Request-ID when it is sane, otherwise mint one."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


def request_id_of(request: Request) -> str | None:
    """Request ID assigned by RequestIDMiddleware, if it ran."""
    return getattr(request.state, "request_id", None)


def with_request_id(headers: dict[str, str] | None, request: Request) -> dict[str, str] | None:
    """Return headers merged with X-Request-ID when the request has one."""
    request_id = request_id_of(request)
    if not request_id:
        return headers
    merged = dict(headers or {})
    merged[REQUEST_ID_HEADER] = request_id
    return merged


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request ID and bind it, with method and path, to the log context.

    Unhandled exceptions escape call_next and are answered by the 500
    handler further out, so that handler sets the header itself from
    request.state (the scope is shared).
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        return response
