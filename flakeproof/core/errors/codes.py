# flakeproof/core/errors/codes.py
from __future__ import annotations

from enum import Enum
from typing import Dict, Final, FrozenSet


class ToolStatus(str, Enum):
    """Terminal outcome of one tool call. Exactly one per call."""
    SUCCESS = "success"
    NEED_USER_ACTION = "need_user_action"
    RETRYABLE_ERROR = "retryable_error"
    FATAL_ERROR = "fatal_error"


class Severity(str, Enum):
    """Severity carried by a ToolError, chosen at the failure site."""
    NEEDS_HUMAN = "needs_human"
    RETRYABLE = "retryable"
    FATAL = "fatal"


# ---- canonical error codes (stable public contract) ----

class ToolCode(str, Enum):
    OK = "OK"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN = "UNKNOWN"

    # needs a person
    NOT_LOGGED_IN = "NOT_LOGGED_IN"
    CAPTCHA_REQUIRED = "CAPTCHA_REQUIRED"
    SMS_RATE_LIMIT = "SMS_RATE_LIMIT"

    # surface / structure
    SELECTOR_CHANGED = "SELECTOR_CHANGED"
    NAVIGATION_TIMEOUT = "NAVIGATION_TIMEOUT"

    # side effects
    PUBLISH_FAILED = "PUBLISH_FAILED"
    IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
    UNSUPPORTED_INPUT = "UNSUPPORTED_INPUT"


DEFAULT_MESSAGES: Final[Dict[ToolCode, str]] = {
    ToolCode.OK: "ok",
    ToolCode.VALIDATION_ERROR: "request validation failed",
    ToolCode.INTERNAL_ERROR: "internal error",
    ToolCode.UNKNOWN: "unknown error",
    ToolCode.NOT_LOGGED_IN: "not logged in",
    ToolCode.CAPTCHA_REQUIRED: "human verification (captcha) required",
    ToolCode.SMS_RATE_LIMIT: "sms verification requested too often",
    ToolCode.SELECTOR_CHANGED: "page structure or selectors changed",
    ToolCode.NAVIGATION_TIMEOUT: "page navigation timed out",
    ToolCode.PUBLISH_FAILED: "publish was not confirmed",
    ToolCode.IMAGE_UPLOAD_FAILED: "image upload failed",
    ToolCode.UNSUPPORTED_INPUT: "input is not supported",
}

STATUS_DEFAULT_CODES: Final[Dict[ToolStatus, ToolCode]] = {
    ToolStatus.SUCCESS: ToolCode.OK,
    ToolStatus.NEED_USER_ACTION: ToolCode.NOT_LOGGED_IN,
    ToolStatus.RETRYABLE_ERROR: ToolCode.UNKNOWN,
    ToolStatus.FATAL_ERROR: ToolCode.UNKNOWN,
}

SEVERITY_STATUS: Final[Dict[Severity, ToolStatus]] = {
    Severity.NEEDS_HUMAN: ToolStatus.NEED_USER_ACTION,
    Severity.RETRYABLE: ToolStatus.RETRYABLE_ERROR,
    Severity.FATAL: ToolStatus.FATAL_ERROR,
}


# ---- semantic groups ----

# Failures that say something about the page itself; worth a screenshot.
DIAGNOSTIC_CODES: Final[FrozenSet[ToolCode]] = frozenset({
    ToolCode.SELECTOR_CHANGED,
    ToolCode.NAVIGATION_TIMEOUT,
})

HUMAN_CODES: Final[FrozenSet[ToolCode]] = frozenset({
    ToolCode.NOT_LOGGED_IN,
    ToolCode.CAPTCHA_REQUIRED,
    ToolCode.SMS_RATE_LIMIT,
})


def status_default_code(status: ToolStatus) -> ToolCode:
    return STATUS_DEFAULT_CODES[ToolStatus(status)]


def default_message(code: ToolCode) -> str:
    return DEFAULT_MESSAGES[ToolCode(code)]


def status_for_severity(severity: Severity) -> ToolStatus:
    return SEVERITY_STATUS[Severity(severity)]


def is_error_status(status: ToolStatus) -> bool:
    return ToolStatus(status) is not ToolStatus.SUCCESS


__all__ = [
    "ToolStatus",
    "Severity",
    "ToolCode",
    "DEFAULT_MESSAGES",
    "STATUS_DEFAULT_CODES",
    "SEVERITY_STATUS",
    "DIAGNOSTIC_CODES",
    "HUMAN_CODES",
    "status_default_code",
    "default_message",
    "status_for_severity",
    "is_error_status",
]
