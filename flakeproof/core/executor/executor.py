# flakeproof/core/executor/executor.py
from __future__ import annotations

import inspect
import json
import logging
import traceback
import uuid
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional

from pydantic import BaseModel, ValidationError

from ..errors import (
    DIAGNOSTIC_CODES,
    ToolCode,
    ToolError,
    ToolStatus,
    default_message,
)
from ..outcome import Failure, HandlerOutput, Outcome, Success, best_effort
from ..result import ToolResult, build_result
from ..runtime import ToolRuntime
from ..tools import ToolContext, ToolSpec
from ..trace import TOOL_END, TraceRecorder
from ...utils.log import redact

logger = logging.getLogger(__name__)


@dataclass
class ExecutorConfig:
    include_stack: bool = True          # full traceback in data.cause for unexpected errors
    summarize_limit: int = 200          # truncate long values in the input summary step
    diagnostic_codes: FrozenSet[ToolCode] = DIAGNOSTIC_CODES


class Executor:
    """
    Runs one tool call end to end:
      - open a trace (tool.start)
      - validate raw input against the tool's model
      - invoke the handler (sync or async)
      - map any raised error to a Failure
      - capture diagnostics for page-level failures
      - close the trace (tool.end), persist it, index it
      - return a ToolResult (never raises)
    """

    def __init__(self, runtime: ToolRuntime, config: Optional[ExecutorConfig] = None) -> None:
        self.runtime = runtime
        self.config = config or ExecutorConfig()

    # ---- public API ----

    async def execute(self, spec: ToolSpec, raw_input: Any = None) -> ToolResult:
        trace_id = str(uuid.uuid4())
        trace = self.runtime.trace_store.create_trace(trace_id, spec.name, self.runtime.session.trace_dir)

        try:
            validated = spec.validate_input(raw_input)
        except ValidationError as e:
            outcome: Outcome = Failure(
                status=ToolStatus.FATAL_ERROR,
                code=ToolCode.VALIDATION_ERROR,
                message=default_message(ToolCode.VALIDATION_ERROR),
                data={"details": self._error_details(e)},
                error=e,
            )
        else:
            self._record_input(trace, spec.name, validated)
            outcome = await self._invoke(spec, validated, ToolContext(trace_id, trace, self.runtime))

        if isinstance(outcome, Failure) and self._wants_diagnostics(outcome):
            artifacts = await best_effort(
                lambda: self.runtime.diagnostics.capture_on_failure(self.runtime.session, trace_id, trace),
                "diagnostics capture",
            )
            if artifacts:
                outcome = outcome.with_data(artifacts)

        return self._finish(trace, outcome)

    async def reject(self, tool_name: str, message: str) -> ToolResult:
        """Fatal UNKNOWN result for a call that never reached a handler."""
        trace_id = str(uuid.uuid4())
        trace = self.runtime.trace_store.create_trace(trace_id, tool_name, self.runtime.session.trace_dir)
        failure = Failure(status=ToolStatus.FATAL_ERROR, code=ToolCode.UNKNOWN, message=message)
        return self._finish(trace, failure)

    # ---- internals ----

    async def _invoke(self, spec: ToolSpec, validated: BaseModel, context: ToolContext) -> Outcome:
        try:
            out = spec.handler(validated, context)
            if inspect.isawaitable(out):
                out = await out
            return Success(self._normalize_output(out))

        except ToolError as e:
            return Failure(
                status=e.status,
                code=e.code,
                message=e.message,
                data=e.data or {},
                error=e,
            )

        except ValidationError as e:
            return Failure(
                status=ToolStatus.FATAL_ERROR,
                code=ToolCode.VALIDATION_ERROR,
                message=default_message(ToolCode.VALIDATION_ERROR),
                data={"details": self._error_details(e)},
                error=e,
            )

        except Exception as e:
            if self.config.include_stack:
                cause = traceback.format_exc()
            else:
                cause = f"{type(e).__name__}: {e}"
            return Failure(
                status=ToolStatus.FATAL_ERROR,
                code=ToolCode.UNKNOWN,
                message=str(e) or default_message(ToolCode.UNKNOWN),
                data={"cause": cause},
                error=e,
            )

    def _normalize_output(self, out: Any) -> HandlerOutput:
        if out is None:
            return HandlerOutput()

        if isinstance(out, HandlerOutput):
            # status/code may arrive as plain strings; invalid ones raise here
            return HandlerOutput(
                status=ToolStatus(out.status) if out.status is not None else None,
                code=ToolCode(out.code) if out.code is not None else None,
                message=out.message,
                data=out.data,
            )

        if isinstance(out, Mapping):
            return HandlerOutput(data=dict(out))

        raise TypeError(f"handler returned unsupported type: {type(out).__name__}")

    def _wants_diagnostics(self, failure: Failure) -> bool:
        return isinstance(failure.error, ToolError) and failure.code in self.config.diagnostic_codes

    def _to_result(self, trace_id: str, outcome: Outcome) -> ToolResult:
        if isinstance(outcome, Success):
            out = outcome.output
            return build_result(
                trace_id,
                out.status or ToolStatus.SUCCESS,
                out.code,
                out.message,
                out.data,
            )
        return build_result(trace_id, outcome.status, outcome.code, outcome.message, outcome.data)

    def _finish(self, trace: TraceRecorder, outcome: Outcome) -> ToolResult:
        result = self._to_result(trace.trace_id, outcome)

        if not result.ok:
            self._log_failure(trace.tool_name, result)

        trace.record(TOOL_END, trace.tool_name, f"{result.status.value}:{result.code.value}")
        try:
            record = trace.complete(result.status, result.code, result.message)
        except OSError as e:
            logger.warning(f"trace {trace.trace_id} could not be written: {e}")
            trace.set_traces_root(None)
            record = trace.complete(result.status, result.code, result.message)

        self.runtime.trace_store.save(record)
        return result

    def _log_failure(self, tool_name: str, result: ToolResult) -> None:
        payload = self._log_payload(tool_name, result)
        if result.status == ToolStatus.FATAL_ERROR:
            logger.error("tool execution failed: %s", payload)
        else:
            logger.warning("tool execution failed: %s", payload)

    @staticmethod
    def _log_payload(tool_name: str, result: ToolResult) -> Dict[str, Any]:
        return {
            "tool": tool_name,
            "traceId": result.trace_id,
            "status": result.status.value,
            "code": result.code.value,
            "message": result.message,
            "data": result.data,
        }

    @staticmethod
    def _error_details(e: ValidationError) -> Any:
        # round-trip through JSON so ctx values (exceptions etc.) are serializable
        return json.loads(e.json(include_url=False))

    def _record_input(self, trace: TraceRecorder, tool_name: str, validated: BaseModel) -> None:
        summary = redact({k: self._summarize_value(v) for k, v in validated.model_dump().items()})
        if summary:
            trace.record("tool.input", tool_name, self._truncate(json.dumps(summary, ensure_ascii=False, default=str)))

    # ---- summarization ----

    def _summarize_value(self, v: Any) -> Any:
        if v is None or isinstance(v, (bool, int, float)):
            return v
        if isinstance(v, str):
            return self._truncate(v)
        if isinstance(v, (bytes, bytearray)):
            return f"<{len(v)} bytes>"
        if isinstance(v, list):
            return [self._summarize_value(x) for x in v[:20]] + (["..."] if len(v) > 20 else [])
        return self._truncate(str(v))

    def _truncate(self, s: str) -> str:
        limit = self.config.summarize_limit
        if len(s) <= limit:
            return s
        return s[:limit] + f"...(+{len(s)-limit} chars)"


__all__ = ["Executor", "ExecutorConfig"]
