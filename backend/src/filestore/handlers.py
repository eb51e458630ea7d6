"""Exception handlers that turn every error into the standard envelope.

Routers and services never format error text themselves: they raise
AppError (or let a raw exception escape) and these handlers reduce it with
serializer.err(). Release mode is read from the settings stored on
app.state at startup.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filestore.codes import ErrorCode
from filestore.config import Settings
from filestore.exceptions import AppError
from filestore.logging import get_logger
from filestore.middleware import request_id_of, with_request_id
from filestore.schemas.response import Response
from filestore.serializer import err, param_err

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def _is_release(request: Request) -> bool:
    settings: Settings = request.app.state.settings
    return settings.is_release


def _envelope(request: Request, resp: Response, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=with_request_id(None, request),
        content=resp.model_dump(),
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Describe the first failing field, e.g. "path: Field required"."""
    errors = exc.errors()
    if not errors:
        return ""
    first = errors[0]
    # loc is ("body" | "query" | "path", field, ...)
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    if not field:
        return str(first.get("msg", ""))
    return f"{field}: {first.get('msg', '')}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Reply with the carrier's own code and message."""
    logger.warning(
        "app_error",
        code=exc.code,
        error=exc.message,
        cause=repr(exc.cause) if exc.cause is not None else None,
    )
    return _envelope(request, err(ErrorCode.NOT_SET, "", exc, release=_is_release(request)))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bad request bodies and query strings become PARAM_ERR envelopes."""
    return _envelope(request, param_err(_validation_message(exc), exc, release=_is_release(request)))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework HTTP errors keep their status, which doubles as the code."""
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return _envelope(
        request,
        err(exc.status_code, message, release=_is_release(request)),
        status_code=exc.status_code,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and reply with an unclassified 500.

    The exception text reaches the client only outside release mode.
    Runs outside RequestIDMiddleware, so the request ID header is added here.
    """
    logger.exception(
        "unhandled_exception",
        request_id=request_id_of(request),
        path=request.url.path,
        method=request.method,
    )
    return _envelope(
        request,
        err(ErrorCode.NOT_SET, INTERNAL_ERROR_MESSAGE, exc, release=_is_release(request)),
        status_code=500,
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
