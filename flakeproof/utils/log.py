# flakeproof/utils/log.py
"""
Logging setup for flakeproof.

Modules log through `logging.getLogger(__name__)`; this only wires a handler
and a redaction filter onto the package logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, FrozenSet, Mapping, Optional

REDACTED = "[REDACTED]"

SENSITIVE_KEYS: FrozenSet[str] = frozenset({
    "authorization",
    "password",
    "token",
    "apikey",
    "cookie",
    "cookies",
})

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def redact(value: Any) -> Any:
    """Mask sensitive keys in (nested) mappings; other values pass through."""
    if isinstance(value, Mapping):
        return {
            k: (REDACTED if str(k).lower() in SENSITIVE_KEYS else redact(v))
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(v) for v in value)
    return value


class RedactingFilter(logging.Filter):
    """Redacts mapping-valued log args before formatting."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, Mapping):
            record.args = redact(record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(redact(a) for a in record.args)
        return True


def configure_logging(level: str = "INFO", stream: Optional[Any] = None) -> logging.Logger:
    """
    Attach one stream handler to the `flakeproof` logger.

    Calling it again replaces the previous handler instead of stacking.
    """
    logger = logging.getLogger("flakeproof")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for h in list(logger.handlers):
        if getattr(h, "_flakeproof", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.addFilter(RedactingFilter())
    handler._flakeproof = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


__all__ = [
    "REDACTED",
    "SENSITIVE_KEYS",
    "redact",
    "RedactingFilter",
    "configure_logging",
]
