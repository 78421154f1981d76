# flakeproof/core/result.py
"""
Result envelope - the only thing a tool call ever returns.

Wire shape:
    {"ok": bool, "traceId": str, "status": str, "code": str, "message": str, "data": {...}}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .errors import (
    ToolCode,
    ToolStatus,
    default_message,
    is_error_status,
    status_default_code,
)


@dataclass(frozen=True)
class ToolResult:
    """
    Uniform, machine-decidable outcome of one tool call.

    Callers decide what to do next from `status` alone:
    - success: done
    - retryable_error: try again as-is (or verify independently)
    - need_user_action: a person must intervene
    - fatal_error: stop
    """
    trace_id: str
    status: ToolStatus
    code: ToolCode
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not is_error_status(self.status)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire shape (camelCase keys)"""
        return {
            "ok": self.ok,
            "traceId": self.trace_id,
            "status": self.status.value,
            "code": self.code.value,
            "message": self.message,
            "data": self.data,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


def build_result(
    trace_id: str,
    status: ToolStatus,
    code: Optional[ToolCode] = None,
    message: Optional[str] = None,
    data: Optional[Mapping[str, Any]] = None,
) -> ToolResult:
    """
    Build a ToolResult. Pure function.

    - missing code    -> default code for the status
    - missing message -> default message for the code
    - missing data    -> {}
    """
    status = ToolStatus(status)
    resolved_code = ToolCode(code) if code is not None else status_default_code(status)
    return ToolResult(
        trace_id=trace_id,
        status=status,
        code=resolved_code,
        message=message if message else default_message(resolved_code),
        data=dict(data) if data else {},
    )


def success_result(
    trace_id: str,
    data: Optional[Mapping[str, Any]] = None,
    message: Optional[str] = None,
) -> ToolResult:
    return build_result(trace_id, ToolStatus.SUCCESS, ToolCode.OK, message, data)


def to_transport_response(result: ToolResult) -> Dict[str, Any]:
    """
    Wrap a ToolResult as a text-content transport response.

    `isError` is present only when the call did not succeed.
    """
    response: Dict[str, Any] = {
        "content": [
            {"type": "text", "text": result.to_json()},
        ],
    }
    if not result.ok:
        response["isError"] = True
    return response


__all__ = [
    "ToolResult",
    "build_result",
    "success_result",
    "to_transport_response",
]
