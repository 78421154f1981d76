# flakeproof/core/idempotency/store.py
"""
Idempotency store - makes side-effecting create-style operations safe to repeat.

One JSON file per logical session maps a fingerprint of the operation's
meaningful inputs to the result it produced:

    {"<sha256>": {"result": {"draftId": "123", "editorUrl": "..."}, "createdAt": "..."}}

The result is kept verbatim; the store's own timestamp lives beside it, so a
reused call returns exactly what the first call returned.

Every lookup/save is a full read-parse-mutate-write cycle. A missing or
corrupt file reads as an empty index. The index is serialized in full before
the file is opened; values JSON cannot encode are stored as their str().

Concurrency:
- run_once() serializes callers with the same fingerprint inside one process
  (single-flight), so a duplicate waits and then observes the first write.
  The per-fingerprint lock is dropped once nobody holds or waits on it.
- Nothing guards the file across processes; two processes creating the same
  fingerprint at once can both perform the side effect.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from ..trace import TraceRecorder, utc_now_iso

logger = logging.getLogger(__name__)

RESULT = "result"
CREATED_AT = "createdAt"

SideEffect = Callable[[], Awaitable[Mapping[str, Any]]]


def fingerprint(*fields: str, sep: str = "\n") -> str:
    """
    Deterministic sha256 over the ordered join of `fields`.

    Order matters: fingerprint("a", "b") != fingerprint("b", "a").
    """
    joined = sep.join(str(f) for f in fields)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class IdempotencyRecord:
    key: str
    result: Dict[str, Any] = field(default_factory=dict)
    created_at: str = ""

    def to_json(self) -> Dict[str, Any]:
        return {RESULT: dict(self.result), CREATED_AT: self.created_at}

    @classmethod
    def from_json(cls, key: str, data: Mapping[str, Any]) -> "IdempotencyRecord":
        result = data.get(RESULT)
        return cls(
            key=key,
            result=dict(result) if isinstance(result, Mapping) else {},
            created_at=str(data.get(CREATED_AT, "")),
        )


class IdempotencyStore:
    """File-backed fingerprint -> result index, shared across calls of one session."""

    def __init__(self, index_path: Union[str, Path]) -> None:
        self.index_path = Path(index_path)
        self._inflight: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    # ---- index file ----

    def _read_index(self) -> Dict[str, Dict[str, Any]]:
        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                parsed = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"idempotency index unreadable, treating as empty: {self.index_path}: {e}")
            return {}

        if not isinstance(parsed, dict):
            return {}
        return {k: v for k, v in parsed.items() if isinstance(v, dict)}

    def _write_index(self, index: Dict[str, Dict[str, Any]]) -> None:
        # serialize before truncating the file
        payload = json.dumps(index, ensure_ascii=False, indent=2, default=str)
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.index_path, "w", encoding="utf-8") as f:
            f.write(payload)

    # ---- public API ----

    def lookup(self, key: str) -> Optional[IdempotencyRecord]:
        entry = self._read_index().get(key)
        if entry is None:
            return None
        return IdempotencyRecord.from_json(key, entry)

    def save(self, key: str, result: Mapping[str, Any]) -> IdempotencyRecord:
        record = IdempotencyRecord(key=key, result=dict(result), created_at=utc_now_iso())
        index = self._read_index()
        index[key] = record.to_json()
        self._write_index(index)
        return record

    def find(self, predicate: Callable[[IdempotencyRecord], bool]) -> Optional[IdempotencyRecord]:
        """First record (in file order) for which predicate is true."""
        for key, entry in self._read_index().items():
            record = IdempotencyRecord.from_json(key, entry)
            if predicate(record):
                return record
        return None

    def __len__(self) -> int:
        return len(self._read_index())

    @property
    def inflight_keys(self) -> int:
        """Fingerprints currently held or awaited in run_once()."""
        return len(self._inflight)

    async def run_once(
        self,
        key: str,
        side_effect: SideEffect,
        trace: Optional[TraceRecorder] = None,
        action: str = "idempotency",
    ) -> Dict[str, Any]:
        """
        Perform `side_effect` at most once per fingerprint.

        Returns the result tagged with `reused` (False for the call that
        performed the side effect, True for every later call).
        """
        lock = self._inflight.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                return await self._run_locked(key, side_effect, trace, action)
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                self._inflight.pop(key, None)

    async def _run_locked(
        self,
        key: str,
        side_effect: SideEffect,
        trace: Optional[TraceRecorder],
        action: str,
    ) -> Dict[str, Any]:
        existing = self.lookup(key)
        if existing is not None:
            if trace is not None:
                trace.record(action, key, "reuse existing result")
            return {**existing.result, "reused": True}

        if trace is not None:
            trace.record(action, key, "no record, performing side effect")
        result = dict(await side_effect())
        result.pop("reused", None)
        self.save(key, result)
        return {**result, "reused": False}


__all__ = [
    "fingerprint",
    "IdempotencyRecord",
    "IdempotencyStore",
]
