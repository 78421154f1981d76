# flakeproof/core/diagnostics/capture.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..outcome import best_effort
from ..trace import TraceRecorder
from .artifacts import ArtifactsManager

logger = logging.getLogger(__name__)

DEFAULT_HTML_MAX_LENGTH = 200_000


class DiagnosticsCapture:
    """
    Collects a screenshot and a page dump when a call fails on the page itself.

    Every step is best-effort: a missing session, a closed page, or a failing
    driver call just means fewer artifacts. capture_on_failure never raises
    a driver or file error.
    """

    def __init__(
        self,
        artifacts: Optional[ArtifactsManager] = None,
        html_max_length: int = DEFAULT_HTML_MAX_LENGTH,
    ) -> None:
        self.artifacts = artifacts or ArtifactsManager()
        self.html_max_length = html_max_length

    async def capture_on_failure(
        self,
        session: Any,
        trace_id: str,
        trace: Optional[TraceRecorder] = None,
    ) -> Dict[str, str]:
        if session is None or not session.initialized:
            return {}

        user_data_dir = session.user_data_dir
        if user_data_dir is None:
            return {}

        page = await best_effort(session.get_page, "diagnostics page lookup")
        if page is None:
            return {}

        screenshot = await best_effort(
            lambda: self.artifacts.capture_screenshot(page, user_data_dir, trace_id, True),
            "diagnostics screenshot",
        )
        dump = await best_effort(
            lambda: self.artifacts.capture_page_dump(page, user_data_dir, trace_id, self.html_max_length),
            "diagnostics page dump",
        )

        out: Dict[str, str] = {}
        if screenshot is not None:
            out["screenshotPath"] = screenshot.path
            self._record(trace, "artifact.screenshot", screenshot.path)
        if dump is not None:
            out["htmlPath"] = dump.path
            self._record(trace, "artifact.html", dump.path)

        logger.debug(f"diagnostics for {trace_id}: {sorted(out)}")
        return out

    @staticmethod
    def _record(trace: Optional[TraceRecorder], action: str, path: str) -> None:
        if trace is not None and not trace.completed:
            trace.record(action, path, "captured on error")


__all__ = ["DiagnosticsCapture", "DEFAULT_HTML_MAX_LENGTH"]
