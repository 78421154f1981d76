# flakeproof/core/runtime/__init__.py
from .runtime import ToolRuntime, create_runtime

__all__ = ["ToolRuntime", "create_runtime"]
