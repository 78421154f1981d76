# flakeproof/core/errors/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .codes import Severity, ToolCode, ToolStatus, default_message, status_for_severity


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unstringifiable>"


class ToolError(Exception):
    """
    The one failure type business logic raises.

    A ToolError says how bad the failure is (severity) and what it was (code).
    The executor turns it into a ToolResult; it never re-classifies severity.
    Attributes are read-only after construction.
    """

    def __init__(
        self,
        severity: Severity,
        code: ToolCode,
        message: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        code = ToolCode(code)
        msg = message or default_message(code)
        super().__init__(msg)
        object.__setattr__(self, "_severity", Severity(severity))
        object.__setattr__(self, "_code", code)
        object.__setattr__(self, "_message", msg)
        object.__setattr__(self, "_data", dict(data) if data else None)

    def __setattr__(self, name: str, value: Any) -> None:
        # tracebacks and contexts are still attached by the interpreter
        if name.startswith("__"):
            object.__setattr__(self, name, value)
            return
        raise AttributeError(f"ToolError is immutable (tried to set {name!r})")

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def code(self) -> ToolCode:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def data(self) -> Optional[Dict[str, Any]]:
        return dict(self._data) if self._data is not None else None

    @property
    def status(self) -> ToolStatus:
        return status_for_severity(self._severity)

    def __str__(self) -> str:
        return f"[{self._code.value}] {self._message}"

    def __repr__(self) -> str:
        return f"ToolError(severity={self._severity.value!r}, code={self._code.value!r}, message={self._message!r})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self._severity.value,
            "code": self._code.value,
            "message": self._message,
            "data": _safe_str(self._data) if self._data is not None else None,
        }

    # -------- factories --------

    @classmethod
    def needs_human(
        cls,
        code: ToolCode,
        message: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> "ToolError":
        return cls(Severity.NEEDS_HUMAN, code, message, data)

    @classmethod
    def retryable(
        cls,
        code: ToolCode,
        message: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> "ToolError":
        return cls(Severity.RETRYABLE, code, message, data)

    @classmethod
    def fatal(
        cls,
        code: ToolCode,
        message: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> "ToolError":
        return cls(Severity.FATAL, code, message, data)


__all__ = ["ToolError"]
