"""Unit tests for error-to-envelope reduction."""

import pytest

from filestore.codes import ErrorCode
from filestore.config import Settings, get_settings
from filestore.exceptions import AppError
from filestore.schemas.response import Response
from filestore.serializer import DB_ERROR_MESSAGE, PARAM_ERROR_MESSAGE, db_err, err, param_err


def test_no_cause_in_release_mode() -> None:
    resp = err(40001, "bad request", None, release=True)
    assert resp == Response(code=40001, msg="bad request", error="")


def test_raw_cause_disclosed_outside_release_mode() -> None:
    resp = err(40001, "bad request", Exception("disk full"), release=False)
    assert resp.code == 40001
    assert resp.msg == "bad request"
    assert resp.error == "disk full"


def test_raw_cause_hidden_in_release_mode() -> None:
    resp = err(40001, "bad request", Exception("disk full"), release=True)
    assert resp.error == ""
    assert "error" not in resp.model_dump()


def test_carrier_overrides_caller_defaults() -> None:
    carrier = AppError(50001, "db failed", Exception("timeout"))

    resp = err(40001, "bad request", carrier, release=False)

    assert resp.model_dump() == {"code": 50001, "msg": "db failed", "error": "timeout"}


def test_carrier_without_cause_has_no_diagnostic() -> None:
    resp = err(ErrorCode.NOT_SET, "", AppError(ErrorCode.USER_BANNED, "account banned"), release=False)
    assert resp.code == ErrorCode.USER_BANNED
    assert resp.msg == "account banned"
    assert resp.error == ""


def test_carrier_cause_hidden_in_release_mode() -> None:
    carrier = AppError(ErrorCode.ENCRYPT_ERROR, "encryption failed", ValueError("bad key size"))
    resp = err(ErrorCode.PARAM_ERR, "x", carrier, release=True)
    assert (resp.code, resp.msg, resp.error) == (ErrorCode.ENCRYPT_ERROR, "encryption failed", "")


@pytest.mark.parametrize("release", [True, False])
def test_reduce_is_total(release: bool) -> None:
    resp = err(ErrorCode.NOT_SET, "", None, release=release)
    assert resp.code == -1
    assert resp.msg == ""


def test_db_err_substitutes_default_message() -> None:
    resp = db_err("", Exception("connection reset"), release=False)
    assert resp.code == ErrorCode.DB_ERROR
    assert resp.msg == DB_ERROR_MESSAGE == "database operation failed"
    assert resp.error == "connection reset"


def test_db_err_keeps_given_message() -> None:
    resp = db_err("cannot update quota", None, release=True)
    assert resp.msg == "cannot update quota"


def test_param_err_substitutes_default_message() -> None:
    resp = param_err("", Exception("missing field"), release=True)
    assert resp.code == ErrorCode.PARAM_ERR
    assert resp.msg == PARAM_ERROR_MESSAGE == "invalid parameter"
    assert resp.error == ""


def test_convenience_constructors_yield_to_carrier() -> None:
    carrier = AppError(ErrorCode.SIGN_EXPIRED, "signature expired")
    assert db_err("", carrier, release=True).code == ErrorCode.SIGN_EXPIRED
    assert param_err("", carrier, release=True).msg == "signature expired"


def test_release_flag_read_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_MODE", "release")
    try:
        assert get_settings().is_release
        assert err(40001, "bad request", Exception("disk full")).error == ""
    finally:
        get_settings.cache_clear()


def test_settings_default_to_debug() -> None:
    settings = Settings(_env_file=None)
    assert settings.app_mode == "debug"
    assert not settings.is_release


def test_wire_form_omits_empty_fields() -> None:
    assert Response.ok().model_dump() == {"code": 0, "msg": ""}
    assert Response.ok({"id": 1}).model_dump() == {"code": 0, "data": {"id": 1}, "msg": ""}


class RemoteError(Exception):
    """Error from a dependent service that exposes code, message and cause."""

    def __init__(self, code: int, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause


class StatusOnlyError(Exception):
    """Has a code but no display message or cause."""

    def __init__(self, code: int) -> None:
        super().__init__(f"status {code}")
        self.code = code


def test_any_coded_error_overrides_caller_defaults() -> None:
    remote = RemoteError(ErrorCode.CALLBACK_ERROR, "callback failed", ConnectionError("reset by peer"))

    resp = err(ErrorCode.PARAM_ERR, "bad request", remote, release=False)

    assert resp.model_dump() == {"code": 50007, "msg": "callback failed", "error": "reset by peer"}


def test_error_with_code_only_is_not_a_carrier() -> None:
    resp = err(ErrorCode.PARAM_ERR, "bad request", StatusOnlyError(502), release=False)

    assert resp.code == ErrorCode.PARAM_ERR
    assert resp.msg == "bad request"
    assert resp.error == "status 502"
