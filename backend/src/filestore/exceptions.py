"""Error carrier raised by services and reduced by the serializer.

Services raise AppError at the point a domain rule is violated, wrapping
the low-level error (I/O, database, crypto) that triggered it. From there
on the carrier, not the raw error, propagates. Handlers in handlers.py
turn it into the standard envelope via serializer.err().
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from filestore.schemas.response import Response


@runtime_checkable
class CodedError(Protocol):
    """Any error that can hand over a structured code and display message."""

    code: int
    message: str
    cause: BaseException | None


class AppError(Exception):
    """Business error carrying a stable code, display message and optional cause.

    Instances are treated as values: with_cause() returns a new carrier
    instead of mutating this one.
    """

    def __init__(self, code: int, message: str, cause: BaseException | None = None) -> None:
        self._code = int(code)
        self._message = message
        self._cause = cause
        super().__init__(message)

    def __reduce__(self) -> tuple[type["AppError"], tuple[int, str, BaseException | None]]:
        # Exception.__reduce__ would rebuild from args, which only holds the message.
        return (type(self), (self._code, self._message, self._cause))

    @property
    def code(self) -> int:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        """Underlying error, for logs only."""
        return self._cause

    @classmethod
    def from_response(cls, resp: "Response") -> "AppError":
        """Rebuild a carrier from an envelope, e.g. one returned by a slave node."""
        return cls(resp.code, resp.msg, Exception(resp.error))

    def with_cause(self, raw: BaseException | None) -> "AppError":
        """Return a copy of this carrier wrapping ``raw``; any previous cause is dropped."""
        return type(self)(self._code, self._message, raw)

    def display_message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return self._message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self._code}, message={self._message!r}, cause={self._cause!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppError):
            return NotImplemented
        return (self._code, self._message, self._cause) == (other._code, other._message, other._cause)

    def __hash__(self) -> int:
        return hash((self._code, self._message))
