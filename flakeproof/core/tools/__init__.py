# flakeproof/core/tools/__init__.py
"""
Core tools for flakeproof.

This package defines the components responsible for:
- Describing tools (name, input model, handler)
- Registering tools
- The context handed to handlers

No side effects on import.
"""

from .context import ToolContext
from .registry import ToolRegistry
from .spec import EmptyInput, Handler, HandlerReturn, ToolInput, ToolSpec

__all__ = [
    "ToolContext",
    "ToolRegistry",
    "EmptyInput",
    "Handler",
    "HandlerReturn",
    "ToolInput",
    "ToolSpec",
]
