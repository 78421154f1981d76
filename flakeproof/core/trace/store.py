# flakeproof/core/trace/store.py
"""
Bounded in-memory index of recent traces.

Eviction is strict insertion order (oldest first), not LRU: reading a trace
never changes its position.

The "latest" pointer is one cursor shared by every caller. Under concurrent
calls it points at whichever call touched the store last.
"""

from __future__ import annotations

import json
from collections import OrderedDict
from pathlib import Path
from typing import List, Optional

from .events import TOOL_START, TraceRecord
from .recorder import PathLike, TraceRecorder

DEFAULT_CAPACITY = 50


class TraceStore:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("trace store capacity must be >= 1")
        self.capacity = capacity
        self._traces: "OrderedDict[str, TraceRecord]" = OrderedDict()
        self._latest_trace_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self._traces)

    def __contains__(self, trace_id: object) -> bool:
        return trace_id in self._traces

    def create_trace(
        self,
        trace_id: str,
        tool_name: str,
        traces_root: Optional[PathLike] = None,
    ) -> TraceRecorder:
        """Open a recorder for a new call. Always succeeds."""
        recorder = TraceRecorder(trace_id, tool_name, traces_root)
        recorder.record(TOOL_START, tool_name, "tool execution started")
        self._latest_trace_id = trace_id
        return recorder

    def save(self, record: TraceRecord) -> None:
        self._traces[record.trace_id] = record
        self._latest_trace_id = record.trace_id

        while len(self._traces) > self.capacity:
            self._traces.popitem(last=False)

    def get_latest(self) -> Optional[TraceRecord]:
        if self._latest_trace_id is None:
            return None
        return self._traces.get(self._latest_trace_id)

    def get_by_trace_id(self, trace_id: str) -> Optional[TraceRecord]:
        return self._traces.get(trace_id)

    def list_recent(self, limit: Optional[int] = None) -> List[TraceRecord]:
        """Records newest first"""
        records = list(reversed(self._traces.values()))
        if limit is not None:
            records = records[: max(0, limit)]
        return records


def load_trace_file(path: PathLike) -> TraceRecord:
    """Read a persisted trace file back into a TraceRecord."""
    with open(Path(path), "r", encoding="utf-8") as f:
        return TraceRecord.from_dict(json.load(f))


__all__ = ["TraceStore", "DEFAULT_CAPACITY", "load_trace_file"]
