# flakeproof/presets/__init__.py
"""
Presets - ready-made tools for flakeproof.

No side effects on import.
"""

from .tools import (
    PingInput,
    SessionInitInput,
    TraceGetInput,
    builtin_tools,
)

__all__ = [
    "PingInput",
    "SessionInitInput",
    "TraceGetInput",
    "builtin_tools",
]
