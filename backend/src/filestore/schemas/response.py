"""Response envelope schema.

Every endpoint answers with the same envelope:
{"code": 0, "data": ..., "msg": "...", "error": "..."}.
``data`` is omitted when empty, ``error`` is omitted whenever the
diagnostic text was suppressed. Clients branch on ``code`` only.
"""

from typing import Any

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer

from filestore.codes import ErrorCode


class Response(BaseModel):
    """Envelope returned to API clients."""

    code: int = 0
    data: Any = None
    msg: str = ""
    error: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        payload: dict[str, Any] = handler(self)
        if payload.get("data") is None:
            payload.pop("data", None)
        if not payload.get("error"):
            payload.pop("error", None)
        return payload

    @classmethod
    def ok(cls, data: Any = None) -> "Response":
        """Build a success envelope."""
        return cls(code=ErrorCode.SUCCESS, data=data)
