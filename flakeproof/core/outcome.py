# flakeproof/core/outcome.py
"""
Tagged outcome types passed between layers.

Handlers may raise; the executor is the single place that turns a raised
exception into a Failure. Everything after that point works on Outcome values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, TypeVar, Union

from .errors import ToolCode, ToolStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class HandlerOutput:
    """
    What a handler returns on the normal path.

    Every field is optional: status defaults to success, code to the status
    default, message to the code default, data to {}.
    """
    status: Optional[ToolStatus] = None
    code: Optional[ToolCode] = None
    message: Optional[str] = None
    data: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class Success:
    output: HandlerOutput
    kind: str = "success"


@dataclass(frozen=True)
class Failure:
    status: ToolStatus
    code: ToolCode
    message: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[BaseException] = None
    kind: str = "failure"

    def with_data(self, extra: Mapping[str, Any]) -> "Failure":
        merged = dict(self.data)
        merged.update(extra)
        return Failure(
            status=self.status,
            code=self.code,
            message=self.message,
            data=merged,
            error=self.error,
        )


Outcome = Union[Success, Failure]


async def best_effort(
    operation: Callable[[], Awaitable[T]],
    what: str,
) -> Optional[T]:
    """
    Fire an optional sub-operation and observe its outcome.

    Returns the operation's result, or None if it raised. The failure is
    logged at debug level and never propagates.
    """
    try:
        return await operation()
    except Exception as e:
        logger.debug(f"best-effort {what} failed: {type(e).__name__}: {e}")
        return None


__all__ = [
    "HandlerOutput",
    "Success",
    "Failure",
    "Outcome",
    "best_effort",
]
