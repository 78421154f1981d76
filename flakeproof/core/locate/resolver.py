# flakeproof/core/locate/resolver.py
"""
Fallback target resolution and the primitives built on it.

Candidates are tried strictly in the order given; the first one that becomes
visible wins. Callers must order candidates from most to least stable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from playwright.async_api import Error as PlaywrightError

from ..errors import ToolCode, ToolError
from ..trace import TraceRecorder
from .candidates import Candidate, build_locator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    locator: Any
    matched: str


async def resolve(
    page: Any,
    trace: TraceRecorder,
    action: str,
    candidates: Sequence[Candidate],
    timeout_ms: int,
) -> Resolved:
    """
    Return the first candidate that becomes visible within timeout_ms.

    Raises:
        ToolError: fatal SELECTOR_CHANGED once every candidate is exhausted
    """
    for candidate in candidates:
        label = candidate.label
        trace.record(action, label, "trying selector candidate")
        locator = build_locator(page, candidate).first

        try:
            await locator.wait_for(state="visible", timeout=timeout_ms)
        except PlaywrightError as e:
            logger.debug(f"{action}: candidate {label} not visible: {e}")
            trace.record(action, label, "selector not matched")
            continue

        trace.record(action, label, "selector matched")
        return Resolved(locator=locator, matched=label)

    raise ToolError.fatal(
        ToolCode.SELECTOR_CHANGED,
        "key element could not be located",
        {"action": action, "candidates": [c.label for c in candidates]},
    )


async def click_with_fallback(
    page: Any,
    trace: TraceRecorder,
    candidates: Sequence[Candidate],
    timeout_ms: int,
) -> str:
    resolved = await resolve(page, trace, "click", candidates, timeout_ms)
    await resolved.locator.click(timeout=timeout_ms)
    trace.record("click", resolved.matched, "click done")
    return resolved.matched


async def fill_with_fallback(
    page: Any,
    trace: TraceRecorder,
    candidates: Sequence[Candidate],
    value: str,
    timeout_ms: int,
) -> str:
    resolved = await resolve(page, trace, "fill", candidates, timeout_ms)
    await resolved.locator.fill(value, timeout=timeout_ms)
    trace.record("fill", resolved.matched, "fill done")
    return resolved.matched


async def goto_with_retry(
    page: Any,
    url: str,
    trace: TraceRecorder,
    retries: int,
    timeout_ms: int,
) -> None:
    """
    Navigate with up to `retries` extra attempts and no delay between them.

    Raises:
        ToolError: retryable NAVIGATION_TIMEOUT after the last failed attempt
    """
    max_attempts = max(1, retries + 1)
    last_error: Optional[BaseException] = None

    for attempt in range(1, max_attempts + 1):
        trace.record("goto", url, f"attempt {attempt}/{max_attempts}")
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
            return
        except PlaywrightError as e:
            logger.debug(f"goto {url} attempt {attempt}/{max_attempts} failed: {e}")
            last_error = e

    raise ToolError.retryable(
        ToolCode.NAVIGATION_TIMEOUT,
        f"page navigation timed out: {url}",
        {"cause": str(last_error) if last_error is not None else ""},
    )


async def contains_risk_text(page: Any, needles: Sequence[str]) -> bool:
    """True if the page body contains any of `needles`. Unreadable body counts as empty."""
    try:
        text = await page.locator("body").inner_text()
    except PlaywrightError:
        text = ""
    return any(needle in text for needle in needles)


__all__ = [
    "Resolved",
    "resolve",
    "click_with_fallback",
    "fill_with_fallback",
    "goto_with_retry",
    "contains_risk_text",
]
