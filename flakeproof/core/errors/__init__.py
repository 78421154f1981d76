# flakeproof/core/errors/__init__.py
"""
Error taxonomy for flakeproof.

This package defines:
- Outcome statuses and error codes
- Default messages per code, default code per status
- ToolError, the typed failure raised by business logic

No side effects on import.
"""

from .codes import (
    ToolStatus,
    Severity,
    ToolCode,
    DIAGNOSTIC_CODES,
    HUMAN_CODES,
    status_default_code,
    default_message,
    status_for_severity,
    is_error_status,
)
from .exceptions import ToolError

__all__ = [
    "ToolStatus",
    "Severity",
    "ToolCode",
    "DIAGNOSTIC_CODES",
    "HUMAN_CODES",
    "status_default_code",
    "default_message",
    "status_for_severity",
    "is_error_status",
    "ToolError",
]
