# flakeproof/core/trace/__init__.py
"""
Trace recording for flakeproof.

This package defines the components responsible for:
- Recording the ordered steps of one tool call
- Persisting completed traces as JSON files
- Keeping a bounded index of recent traces

No side effects on import.
"""

from .events import TOOL_END, TOOL_START, TraceRecord, TraceStep, utc_now_iso
from .recorder import TraceRecorder
from .store import DEFAULT_CAPACITY, TraceStore, load_trace_file

__all__ = [
    "TOOL_START",
    "TOOL_END",
    "TraceRecord",
    "TraceStep",
    "utc_now_iso",
    "TraceRecorder",
    "TraceStore",
    "DEFAULT_CAPACITY",
    "load_trace_file",
]
