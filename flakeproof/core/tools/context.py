# flakeproof/core/tools/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..trace import TraceRecorder

if TYPE_CHECKING:
    from ..runtime import ToolRuntime


@dataclass(frozen=True)
class ToolContext:
    """What a handler gets besides its validated input."""
    trace_id: str
    trace: TraceRecorder
    runtime: "ToolRuntime"


__all__ = ["ToolContext"]
