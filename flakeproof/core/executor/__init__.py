# flakeproof/core/executor/__init__.py
"""
Core executor for flakeproof.

This package defines the components responsible for:
- Running one tool call end to end
- Mapping raised errors to the four-state outcome
- Finalizing the call's trace

No side effects on import.
"""

from .executor import Executor, ExecutorConfig

__all__ = [
    "Executor",
    "ExecutorConfig",
]
