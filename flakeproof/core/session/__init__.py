# flakeproof/core/session/__init__.py
from .session import (
    COOKIE_FILE,
    SESSION_ID,
    BrowserSession,
    Launcher,
    SessionInfo,
    SessionOptions,
    parse_proxy,
    playwright_launcher,
)

__all__ = [
    "COOKIE_FILE",
    "SESSION_ID",
    "BrowserSession",
    "Launcher",
    "SessionInfo",
    "SessionOptions",
    "parse_proxy",
    "playwright_launcher",
]
