# flakeproof/core/trace/events.py
"""
Trace models: one TraceRecord per tool call, made of ordered TraceSteps.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from ..errors import ToolCode, ToolStatus


def utc_now_iso() -> str:
    """Get current UTC time in ISO8601 format"""
    return datetime.now(timezone.utc).isoformat()


# Well-known step actions
TOOL_START = "tool.start"
TOOL_END = "tool.end"


@dataclass(frozen=True)
class TraceStep:
    """One recorded action. Never mutated after append."""
    ts: str
    action: str
    target: str
    note: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ts": self.ts,
            "action": self.action,
            "target": self.target,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TraceStep":
        return cls(
            ts=str(data.get("ts", "")),
            action=str(data.get("action", "")),
            target=str(data.get("target", "")),
            note=str(data.get("note", "")),
        )


@dataclass(frozen=True)
class TraceRecord:
    """
    Immutable view of one tool call's trace.

    finished_at / status / code / message stay None until the owning
    recorder completes.
    """
    trace_id: str
    tool_name: str
    started_at: str
    steps: Tuple[TraceStep, ...] = field(default_factory=tuple)
    finished_at: Optional[str] = None
    status: Optional[ToolStatus] = None
    code: Optional[ToolCode] = None
    message: Optional[str] = None
    file_path: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.finished_at is not None

    def with_file_path(self, file_path: str) -> "TraceRecord":
        return replace(self, file_path=file_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        result: Dict[str, Any] = {
            "traceId": self.trace_id,
            "toolName": self.tool_name,
            "startedAt": self.started_at,
        }
        if self.finished_at is not None:
            result["finishedAt"] = self.finished_at
        if self.status is not None:
            result["status"] = self.status.value
        if self.code is not None:
            result["code"] = self.code.value
        if self.message is not None:
            result["message"] = self.message
        result["steps"] = [s.to_dict() for s in self.steps]
        if self.file_path is not None:
            result["filePath"] = self.file_path
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TraceRecord":
        status = data.get("status")
        code = data.get("code")
        return cls(
            trace_id=str(data["traceId"]),
            tool_name=str(data.get("toolName", "")),
            started_at=str(data.get("startedAt", "")),
            steps=tuple(TraceStep.from_dict(s) for s in data.get("steps") or []),
            finished_at=data.get("finishedAt"),
            status=ToolStatus(status) if status else None,
            code=ToolCode(code) if code else None,
            message=data.get("message"),
            file_path=data.get("filePath"),
        )


__all__ = [
    "utc_now_iso",
    "TOOL_START",
    "TOOL_END",
    "TraceStep",
    "TraceRecord",
]
