# flakeproof/core/diagnostics/__init__.py
"""
Failure diagnostics (screenshots, page dumps).

No side effects on import.
"""

from .artifacts import ArtifactsManager, PageDumpArtifact, ScreenshotArtifact
from .capture import DEFAULT_HTML_MAX_LENGTH, DiagnosticsCapture

__all__ = [
    "ArtifactsManager",
    "PageDumpArtifact",
    "ScreenshotArtifact",
    "DiagnosticsCapture",
    "DEFAULT_HTML_MAX_LENGTH",
]
