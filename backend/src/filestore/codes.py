"""Stable response codes shared with API clients.

Three-digit codes reuse their HTTP meaning. Five-digit codes are
application-defined: a leading 4 marks a client-side fault (bad input,
expired session, policy violation), a leading 5 a server-side fault
(database, crypto, I/O, cache). Values are part of the public contract
and must never change.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Numeric codes carried in every response envelope."""

    SUCCESS = 0

    # HTTP-native
    NOT_FULLY_SUCCESS = 203
    CHECK_LOGIN = 401
    NO_PERMISSION = 403
    NOT_FOUND = 404
    CONFLICT = 409

    # Client-side faults
    PARAM_ERR = 40001
    UPLOAD_FAILED = 40002
    CREATE_FOLDER_FAILED = 40003
    OBJECT_EXIST = 40004
    SIGN_EXPIRED = 40005
    POLICY_NOT_ALLOWED = 40006
    GROUP_NOT_ALLOWED = 40007
    ADMIN_REQUIRED = 40008
    MASTER_NOT_FOUND = 40009
    # Six digits in the deployed contract, kept as-is.
    UPLOAD_SESSION_EXPIRED = 400011
    INVALID_CHUNK_INDEX = 400012
    INVALID_CONTENT_LENGTH = 400013
    BATCH_SOURCE_SIZE = 40014
    BATCH_ARIA2_SIZE = 40015
    PARENT_NOT_EXIST = 40016
    USER_BANNED = 40017
    USER_NOT_ACTIVATED = 40018
    FEATURE_NOT_ENABLED = 40019
    CREDENTIAL_INVALID = 40020
    USER_NOT_FOUND = 40021
    TWO_FA_CODE_ERR = 40022
    LOGIN_SESSION_NOT_EXIST = 40023
    INITIALIZE_AUTHN = 40024
    WEBAUTHN_CREDENTIAL_ERROR = 40025
    CAPTCHA_ERROR = 40026
    CAPTCHA_REFRESH_NEEDED = 40027
    FAILED_SEND_EMAIL = 40028
    INVALID_TEMP_LINK = 40029
    TEMP_LINK_EXPIRED = 40030

    # Server-side faults
    DB_ERROR = 50001
    ENCRYPT_ERROR = 50002
    IO_FAILED = 50004
    INTERNAL_SETTING = 50005
    CACHE_OPERATION = 50006
    CALLBACK_ERROR = 50007

    # Not yet determined; resolve from the underlying error later.
    NOT_SET = -1


def _is_app_defined(code: int, leading: str) -> bool:
    digits = str(code)
    return len(digits) >= 5 and digits.startswith(leading)


def is_http_native(code: int) -> bool:
    """True for three-digit codes that keep their HTTP status meaning."""
    return 100 <= code <= 999


def is_client_error(code: int) -> bool:
    return _is_app_defined(code, "4")


def is_server_error(code: int) -> bool:
    return _is_app_defined(code, "5")
