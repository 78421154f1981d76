# flakeproof/api/engine.py
"""
ToolEngine - recommended entry point.

Owns one runtime (config, browser session, trace store), a tool registry and
the executor that runs calls against them.

Example:
    >>> engine = ToolEngine()
    >>> result = await engine.call("tool.ping", {"message": "hi"})
    >>> result.status, result.data["echo"]
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel

from ..config import EngineConfig
from ..core.executor import Executor, ExecutorConfig
from ..core.result import ToolResult
from ..core.runtime import ToolRuntime, create_runtime
from ..core.session import BrowserSession
from ..core.tools import EmptyInput, Handler, ToolRegistry, ToolSpec
from ..presets import builtin_tools


class ToolEngine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        session: Optional[BrowserSession] = None,
        registry: Optional[ToolRegistry] = None,
        executor_config: Optional[ExecutorConfig] = None,
        include_builtins: bool = True,
    ) -> None:
        self.runtime: ToolRuntime = create_runtime(config, session)
        self.registry = registry or ToolRegistry()
        self.executor = Executor(self.runtime, executor_config)

        if include_builtins:
            for spec in builtin_tools():
                if spec.name not in self.registry:
                    self.registry.register(spec)

    # ---- registration ----

    def register(
        self,
        name: str,
        handler: Handler,
        input_model: Type[BaseModel] = EmptyInput,
        description: str = "",
    ) -> ToolSpec:
        return self.registry.register(
            ToolSpec(name=name, handler=handler, input_model=input_model, description=description)
        )

    def tool(
        self,
        name: str,
        input_model: Type[BaseModel] = EmptyInput,
        description: str = "",
    ) -> Callable[[Handler], Handler]:
        """
        Decorator form of register().

        Example:
            >>> @engine.tool("add", AddInput)
            ... def add(params, context):
            ...     return {"sum": params.a + params.b}
        """
        def decorator(fn: Handler) -> Handler:
            self.register(name, fn, input_model, description)
            return fn
        return decorator

    def list_tools(self) -> List[str]:
        return self.registry.list()

    def describe(self, name: str) -> Dict[str, Any]:
        return self.registry.describe(name)

    # ---- calls ----

    async def call(self, name: str, args: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Run one tool call. Never raises; unknown tools give a fatal result."""
        spec = self.registry.get(name)
        if spec is None:
            return await self.executor.reject(name, f"tool not found: {name}")
        return await self.executor.execute(spec, args)

    # ---- lifecycle ----

    async def close(self) -> None:
        await self.runtime.session.close()

    async def __aenter__(self) -> "ToolEngine":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ["ToolEngine"]
