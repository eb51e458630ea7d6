"""Reduce any error into a Response envelope.

err() is the single place where errors become client-facing text. A
CodedError always wins over the caller's default code and message. The
underlying error text is disclosed in ``error`` only outside release mode.
"""

from filestore.codes import ErrorCode
from filestore.config import get_settings
from filestore.exceptions import CodedError
from filestore.schemas.response import Response

DB_ERROR_MESSAGE = "database operation failed"
PARAM_ERROR_MESSAGE = "invalid parameter"


def err(
    code: int,
    msg: str,
    cause: BaseException | None = None,
    *,
    release: bool | None = None,
) -> Response:
    """Build an error envelope.

    Args:
        code: Default code, used unless ``cause`` carries its own.
        msg: Default display message, same precedence as ``code``.
        cause: Raw error or carrier behind the failure, may be None.
        release: Hardened-mode flag. None reads it from settings.

    Returns:
        Envelope with ``error`` populated only when a diagnostic exists
        and the process is not in release mode.
    """
    if isinstance(cause, CodedError):
        code, msg, cause = cause.code, cause.message, cause.cause

    if release is None:
        release = get_settings().is_release

    detail = ""
    if cause is not None and not release:
        detail = str(cause)
    return Response(code=code, msg=msg, error=detail)


def db_err(msg: str, cause: BaseException | None = None, *, release: bool | None = None) -> Response:
    if not msg:
        msg = DB_ERROR_MESSAGE
    return err(ErrorCode.DB_ERROR, msg, cause, release=release)


def param_err(msg: str, cause: BaseException | None = None, *, release: bool | None = None) -> Response:
    if not msg:
        msg = PARAM_ERROR_MESSAGE
    return err(ErrorCode.PARAM_ERR, msg, cause, release=release)
