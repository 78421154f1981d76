# flakeproof/core/trace/recorder.py
"""
Per-call trace recorder.

State machine: open -> recording (record*) -> completed.

A recorder belongs to exactly one tool call (single writer). Completing it
freezes the record and, if a traces root is configured, writes
<traces_root>/<trace_id>.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..errors import ToolCode, ToolStatus
from .events import TraceRecord, TraceStep, utc_now_iso

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TraceRecorder:
    """Append-only step log for one tool call."""

    def __init__(
        self,
        trace_id: str,
        tool_name: str,
        traces_root: Optional[PathLike] = None,
    ) -> None:
        self.trace_id = trace_id
        self.tool_name = tool_name
        self._traces_root: Optional[Path] = Path(traces_root) if traces_root else None
        self._started_at = utc_now_iso()
        self._steps: List[TraceStep] = []
        self._final: Optional[TraceRecord] = None

    # ---- state ----

    @property
    def traces_root(self) -> Optional[Path]:
        return self._traces_root

    @property
    def completed(self) -> bool:
        return self._final is not None

    def set_traces_root(self, traces_root: Optional[PathLike]) -> None:
        """Retarget persistence. Only meaningful before complete()."""
        if self._final is not None:
            raise RuntimeError(f"trace {self.trace_id} already completed")
        self._traces_root = Path(traces_root) if traces_root else None

    # ---- recording ----

    def record(self, action: str, target: str, note: str = "") -> None:
        if self._final is not None:
            raise RuntimeError(f"trace {self.trace_id} already completed; cannot record {action!r}")
        self._steps.append(TraceStep(ts=utc_now_iso(), action=action, target=target, note=note))

    def snapshot(self) -> TraceRecord:
        """Current state as an immutable record (copy of steps so far)."""
        if self._final is not None:
            return self._final
        return TraceRecord(
            trace_id=self.trace_id,
            tool_name=self.tool_name,
            started_at=self._started_at,
            steps=tuple(self._steps),
        )

    # ---- completion ----

    def complete(self, status: ToolStatus, code: ToolCode, message: str) -> TraceRecord:
        """
        Finalize the trace and persist it if a traces root is set.

        Calling this twice returns the first result unchanged.
        """
        if self._final is not None:
            logger.debug(f"trace {self.trace_id} completed twice; keeping first result")
            return self._final

        record = TraceRecord(
            trace_id=self.trace_id,
            tool_name=self.tool_name,
            started_at=self._started_at,
            steps=tuple(self._steps),
            finished_at=utc_now_iso(),
            status=ToolStatus(status),
            code=ToolCode(code),
            message=message,
        )

        if self._traces_root is not None:
            file_path = self._traces_root / f"{self.trace_id}.json"
            record = record.with_file_path(str(file_path))
            self._write(file_path, record)

        self._final = record
        return record

    def _write(self, file_path: Path, record: TraceRecord) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, ensure_ascii=False, indent=2)


__all__ = ["TraceRecorder"]
