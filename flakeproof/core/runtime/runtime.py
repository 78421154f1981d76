# flakeproof/core/runtime/runtime.py
"""
Runtime - the shared state every tool call runs against.

One runtime per engine: config, the browser session, the bounded trace
store, diagnostics capture and the idempotency stores (one index file per
flow name under <userDataDir>/idempotency/).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ...config import EngineConfig
from ..diagnostics import DiagnosticsCapture
from ..errors import ToolCode, ToolError
from ..idempotency import IdempotencyStore
from ..locate import goto_with_retry
from ..session import BrowserSession, SessionOptions
from ..trace import TraceRecorder, TraceStore


@dataclass
class ToolRuntime:
    config: EngineConfig
    session: BrowserSession
    trace_store: TraceStore
    diagnostics: DiagnosticsCapture
    _idempotency: Dict[Path, IdempotencyStore] = field(default_factory=dict, repr=False)

    def session_options(self, **overrides) -> SessionOptions:
        """SessionOptions from config, with per-call overrides (None means unset)."""
        values = {
            "user_data_dir": self.config.user_data_dir,
            "headless": self.config.headless,
            "locale": self.config.locale,
            "timeout_ms": self.config.timeout_ms,
            "proxy": self.config.proxy,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SessionOptions(**values)

    def idempotency_store(self, name: str) -> IdempotencyStore:
        """
        Store backed by <userDataDir>/idempotency/<name>.json.

        The same store object is returned for the same file, so in-flight
        keys are shared by every call in this runtime.

        Raises:
            ToolError: fatal NOT_LOGGED_IN when the session is not started
        """
        root = self.session.idempotency_dir
        if root is None:
            raise ToolError.fatal(ToolCode.NOT_LOGGED_IN, "session not initialized, call session_init first")

        path = root / f"{name}.json"
        store = self._idempotency.get(path)
        if store is None:
            store = IdempotencyStore(path)
            self._idempotency[path] = store
        return store

    async def goto(self, page: Any, url: str, trace: TraceRecorder) -> None:
        """Navigate with the configured retry count and timeout."""
        await goto_with_retry(page, url, trace, self.config.retry_count, self.config.timeout_ms)


def create_runtime(
    config: Optional[EngineConfig] = None,
    session: Optional[BrowserSession] = None,
) -> ToolRuntime:
    config = config or EngineConfig.default()
    return ToolRuntime(
        config=config,
        session=session or BrowserSession(),
        trace_store=TraceStore(capacity=config.trace_capacity),
        diagnostics=DiagnosticsCapture(html_max_length=config.html_dump_max_length),
    )


__all__ = ["ToolRuntime", "create_runtime"]
