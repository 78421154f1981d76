# flakeproof/presets/tools.py
"""
Built-in tools: health check, session lifecycle, trace lookup.

Site-specific flows register their own ToolSpecs next to these; none of the
tools here know anything about the pages they end up driving.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from ..core.errors import ToolCode, ToolError
from ..core.outcome import HandlerOutput, best_effort
from ..core.tools import EmptyInput, ToolContext, ToolInput, ToolSpec
from ..core.trace import utc_now_iso

PING_MAX_MESSAGE_LENGTH = 200


# ---------------------------
# tool.ping
# ---------------------------

class PingInput(ToolInput):
    message: Optional[str] = Field(default=None, min_length=1, max_length=PING_MAX_MESSAGE_LENGTH)


def ping(params: PingInput, context: ToolContext) -> HandlerOutput:
    """Health check: echo the message back with a server timestamp."""
    return HandlerOutput(
        data={
            "ok": True,
            "echo": params.message or "pong",
            "timestamp": utc_now_iso(),
        },
        message="ping success",
    )


# ---------------------------
# session_*
# ---------------------------

class SessionInitInput(ToolInput):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, populate_by_name=True)

    headless: Optional[bool] = None
    user_data_dir: Optional[str] = Field(default=None, alias="userDataDir", min_length=1)
    proxy: Optional[str] = Field(default=None, min_length=1)
    locale: Optional[str] = Field(default=None, min_length=1)
    timeout_ms: Optional[int] = Field(default=None, alias="timeoutMs", gt=0)


async def session_init(params: SessionInitInput, context: ToolContext) -> HandlerOutput:
    """Start or reuse the browser session. Unset fields fall back to config."""
    runtime = context.runtime
    options = runtime.session_options(
        user_data_dir=params.user_data_dir,
        headless=params.headless,
        locale=params.locale,
        timeout_ms=params.timeout_ms,
        proxy=params.proxy,
    )
    info = await runtime.session.start(options)

    # this call's trace belongs with the session it just opened
    context.trace.set_traces_root(runtime.session.trace_dir)
    context.trace.record("session.init", info.user_data_dir, info.session_id)

    return HandlerOutput(
        data={
            "sessionId": info.session_id,
            "headless": info.headless,
            "userDataDir": info.user_data_dir,
        },
        message="session initialized",
    )


async def session_close(params: EmptyInput, context: ToolContext) -> Dict[str, Any]:
    """Close the browser session, saving its cookies first."""
    session = context.runtime.session
    if session.initialized:
        persisted = await best_effort(session.persist_cookies, "cookie persist")
        if persisted is not None:
            context.trace.record("session.cookie.persist", persisted["path"], f"cookieCount={persisted['cookieCount']}")

    await session.close()
    context.trace.record("session.close", session.session_id, "session closed")
    return {"closed": True}


def session_status(params: EmptyInput, context: ToolContext) -> Dict[str, Any]:
    """Whether a session is running, and with which options."""
    return context.runtime.session.snapshot_status()


# ---------------------------
# trace_get
# ---------------------------

class TraceGetInput(ToolInput):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True, populate_by_name=True)

    trace_id: Optional[str] = Field(default=None, alias="traceId", min_length=1)


def trace_get(params: TraceGetInput, context: ToolContext) -> Dict[str, Any]:
    """Latest completed trace, or the one with the given id."""
    store = context.runtime.trace_store
    if params.trace_id:
        record = store.get_by_trace_id(params.trace_id)
    else:
        # the latest pointer already names this call's own, unsaved trace
        recent = store.list_recent(1)
        record = recent[0] if recent else None

    if record is None:
        raise ToolError.fatal(ToolCode.UNKNOWN, "trace not found", {"traceId": params.trace_id})
    return {"trace": record.to_dict()}


def builtin_tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="tool.ping",
            handler=ping,
            input_model=PingInput,
            description="Health check: returns the echoed message and a server timestamp.",
        ),
        ToolSpec(
            name="session_init",
            handler=session_init,
            input_model=SessionInitInput,
            description="Start or reuse the browser session with a persistent profile. All fields are optional.",
        ),
        ToolSpec(
            name="session_close",
            handler=session_close,
            description="Close the browser session.",
        ),
        ToolSpec(
            name="session_status",
            handler=session_status,
            description="Report whether a browser session is running.",
        ),
        ToolSpec(
            name="trace_get",
            handler=trace_get,
            input_model=TraceGetInput,
            description="Fetch the latest trace, or a specific one by traceId.",
        ),
    ]


__all__ = [
    "PING_MAX_MESSAGE_LENGTH",
    "PingInput",
    "SessionInitInput",
    "TraceGetInput",
    "ping",
    "session_init",
    "session_close",
    "session_status",
    "trace_get",
    "builtin_tools",
]
