# flakeproof/__init__.py
"""
flakeproof - Resilient tool execution engine for flaky web UIs

Every tool call returns one ToolResult with a four-state status a caller can
act on without reading the message:
- success: done
- retryable_error: try again
- need_user_action: a person must step in (captcha, login, rate limit)
- fatal_error: stop

User-facing API:
- ToolEngine: register tools, call them by name
- ToolError: raise from a handler to pick the outcome
- HandlerOutput: return from a handler to pick a non-default outcome

Basic usage:
    >>> from flakeproof import ToolEngine
    >>> engine = ToolEngine()
    >>> result = await engine.call("tool.ping", {"message": "hi"})
    >>> print(result.to_json())

Custom tools:
    >>> class AddInput(ToolInput):
    ...     a: int
    ...     b: int
    >>> @engine.tool("add", AddInput)
    ... def add(params, context):
    ...     return {"sum": params.a + params.b}
"""

__version__ = "0.1.0"

# User-facing API (main entry point)
from .api import ToolEngine

# Core types
from .core.errors import Severity, ToolCode, ToolError, ToolStatus
from .core.outcome import HandlerOutput
from .core.result import ToolResult, build_result, success_result, to_transport_response
from .core.tools import EmptyInput, ToolContext, ToolInput, ToolRegistry, ToolSpec

# Advanced components (for integrators)
from .config import EngineConfig, load_config
from .core.executor import Executor, ExecutorConfig
from .core.runtime import ToolRuntime, create_runtime
from .core.session import BrowserSession, SessionOptions
from .core.trace import TraceRecorder, TraceStore

__all__ = [
    # Version
    "__version__",

    # User-facing API
    "ToolEngine",

    # Core types
    "Severity",
    "ToolCode",
    "ToolError",
    "ToolStatus",
    "HandlerOutput",
    "ToolResult",
    "build_result",
    "success_result",
    "to_transport_response",
    "EmptyInput",
    "ToolContext",
    "ToolInput",
    "ToolRegistry",
    "ToolSpec",

    # Advanced components
    "EngineConfig",
    "load_config",
    "Executor",
    "ExecutorConfig",
    "ToolRuntime",
    "create_runtime",
    "BrowserSession",
    "SessionOptions",
    "TraceRecorder",
    "TraceStore",
]
