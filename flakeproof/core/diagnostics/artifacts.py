# flakeproof/core/diagnostics/artifacts.py
"""
Artifact files captured for a trace:

    <userDataDir>/artifacts/<traceId>/screenshot.png
    <userDataDir>/artifacts/<traceId>/page.html
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ScreenshotArtifact:
    path: str


@dataclass(frozen=True)
class PageDumpArtifact:
    path: str
    html: str
    truncated: bool


class ArtifactsManager:
    def trace_artifact_dir(self, user_data_dir: PathLike, trace_id: str) -> Path:
        return Path(user_data_dir) / "artifacts" / trace_id

    def _ensure_dir(self, user_data_dir: PathLike, trace_id: str) -> Path:
        d = self.trace_artifact_dir(user_data_dir, trace_id)
        d.mkdir(parents=True, exist_ok=True)
        return d

    def save_screenshot_bytes(
        self,
        data: bytes,
        user_data_dir: PathLike,
        trace_id: str,
        filename: str = "screenshot.png",
    ) -> Path:
        path = self._ensure_dir(user_data_dir, trace_id) / filename
        path.write_bytes(data)
        return path

    def save_html(
        self,
        html: str,
        user_data_dir: PathLike,
        trace_id: str,
        filename: str = "page.html",
    ) -> Path:
        path = self._ensure_dir(user_data_dir, trace_id) / filename
        path.write_text(html, encoding="utf-8")
        return path

    async def capture_screenshot(
        self,
        page: Any,
        user_data_dir: PathLike,
        trace_id: str,
        full_page: bool = True,
    ) -> ScreenshotArtifact:
        data = await page.screenshot(type="png", full_page=full_page)
        path = self.save_screenshot_bytes(data, user_data_dir, trace_id)
        return ScreenshotArtifact(path=str(path))

    async def capture_page_dump(
        self,
        page: Any,
        user_data_dir: PathLike,
        trace_id: str,
        max_length: Optional[int] = None,
    ) -> PageDumpArtifact:
        html = await page.content()
        limit = int(max_length) if max_length and max_length > 0 else None
        truncated = limit is not None and len(html) > limit
        if truncated:
            html = html[:limit]
        path = self.save_html(html, user_data_dir, trace_id)
        return PageDumpArtifact(path=str(path), html=html, truncated=truncated)


__all__ = [
    "ScreenshotArtifact",
    "PageDumpArtifact",
    "ArtifactsManager",
]
