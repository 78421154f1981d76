# tests/conftest.py
"""
Fakes standing in for the Playwright driver.

Locators are keyed by the same label a selector candidate renders to, so a
test can say "these labels are visible" and inspect which ones were waited on.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from flakeproof.config import EngineConfig
from flakeproof.core.session import BrowserSession


def _fmt(value: Any) -> str:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return str(value)


class FakeLocator:
    def __init__(self, page: "FakePage", key: str) -> None:
        self.page = page
        self.key = key

    @property
    def first(self) -> "FakeLocator":
        return self

    async def wait_for(self, state: str = "visible", timeout: Optional[int] = None) -> None:
        self.page.waited.append(self.key)
        if self.key not in self.page.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key}")

    async def click(self, timeout: Optional[int] = None) -> None:
        self.page.clicked.append(self.key)

    async def fill(self, value: str, timeout: Optional[int] = None) -> None:
        self.page.filled.append((self.key, value))

    async def inner_text(self) -> str:
        if self.page.body_error:
            raise PlaywrightError("Target page, context or browser has been closed")
        return self.page.body_text


class FakePage:
    def __init__(
        self,
        visible: Optional[List[str]] = None,
        body_text: str = "",
        goto_failures: int = 0,
        html: str = "<html><body>hello</body></html>",
    ) -> None:
        self.visible = set(visible or [])
        self.body_text = body_text
        self.body_error = False
        self.goto_failures = goto_failures
        self.html = html
        self.screenshot_error: Optional[Exception] = None
        self.content_error: Optional[Exception] = None
        self.waited: List[str] = []
        self.clicked: List[str] = []
        self.filled: List[tuple] = []
        self.gotos: List[Dict[str, Any]] = []
        self.closed = False

    # ---- locators ----

    def get_by_role(self, role: str, name: Any = None) -> FakeLocator:
        return FakeLocator(self, f"role={role};name={_fmt(name)}")

    def get_by_text(self, text: Any) -> FakeLocator:
        return FakeLocator(self, f"text={_fmt(text)}")

    def locator(self, css: str) -> FakeLocator:
        return FakeLocator(self, f"css={css}")

    def get_by_placeholder(self, placeholder: Any) -> FakeLocator:
        return FakeLocator(self, f"placeholder={_fmt(placeholder)}")

    def get_by_label(self, label: Any) -> FakeLocator:
        return FakeLocator(self, f"label={_fmt(label)}")

    # ---- navigation / capture ----

    async def goto(self, url: str, wait_until: str = "load", timeout: Optional[int] = None) -> None:
        self.gotos.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.goto_failures > 0:
            self.goto_failures -= 1
            raise PlaywrightTimeoutError(f"page.goto: Timeout {timeout}ms exceeded")

    async def screenshot(self, type: str = "png", full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"\x89PNG\r\n\x1a\nfake"

    async def content(self) -> str:
        if self.content_error is not None:
            raise self.content_error
        return self.html

    def is_closed(self) -> bool:
        return self.closed

    async def close(self, run_before_unload: bool = False) -> None:
        self.closed = True


class FakeContext:
    def __init__(self, page: Optional[FakePage] = None) -> None:
        self.pages: List[FakePage] = [page] if page is not None else []
        self.jar: List[Dict[str, Any]] = []
        self.default_timeout: Optional[int] = None
        self.default_navigation_timeout: Optional[int] = None
        self.closed = False

    def set_default_timeout(self, timeout: int) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: int) -> None:
        self.default_navigation_timeout = timeout

    async def new_page(self) -> FakePage:
        page = FakePage()
        self.pages.append(page)
        return page

    async def cookies(self) -> List[Dict[str, Any]]:
        return list(self.jar)

    async def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        self.jar.extend(cookies)

    async def close(self) -> None:
        self.closed = True


class FakeLauncher:
    """Records every launch; each launch gets a fresh context around `page`."""

    def __init__(self, page: Optional[FakePage] = None) -> None:
        self.page = page
        self.launches: List[Any] = []
        self.contexts: List[FakeContext] = []
        self.stops = 0

    async def __call__(self, options):
        self.launches.append(options)
        context = FakeContext(self.page if self.page is not None else FakePage())
        self.contexts.append(context)

        async def stop() -> None:
            self.stops += 1

        return context, stop


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_launcher(fake_page) -> FakeLauncher:
    return FakeLauncher(fake_page)


@pytest.fixture
def browser_session(fake_launcher) -> BrowserSession:
    return BrowserSession(launcher=fake_launcher)


@pytest.fixture
def engine_config(tmp_path) -> EngineConfig:
    return EngineConfig(user_data_dir=str(tmp_path / "profile"), headless=True)


@pytest.fixture
def make_page():
    return FakePage


@pytest.fixture
def make_launcher():
    return FakeLauncher
