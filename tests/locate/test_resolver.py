# tests/locate/test_resolver.py
import re

import pytest

from flakeproof.core.errors import ToolCode, ToolError, ToolStatus
from flakeproof.core.locate import (
    by_css,
    by_label,
    by_placeholder,
    by_role,
    by_text,
    build_locator,
    click_with_fallback,
    contains_risk_text,
    fill_with_fallback,
    goto_with_retry,
    resolve,
)
from flakeproof.core.trace import TraceRecorder


def notes(trace: TraceRecorder):
    return [(s.target, s.note) for s in trace.snapshot().steps]


class TestCandidateLabels:
    def test_labels(self):
        assert by_role("button", "Publish").label == "role=button;name=Publish"
        assert by_text("Save").label == "text=Save"
        assert by_css("#title").label == "css=#title"
        assert by_placeholder("Title").label == "placeholder=Title"
        assert by_label("Email").label == "label=Email"

    def test_regex_label(self):
        assert by_role("button", re.compile("publish|post")).label == "role=button;name=/publish|post/"

    def test_unknown_candidate_is_rejected(self, fake_page):
        with pytest.raises(TypeError):
            build_locator(fake_page, object())


class TestResolve:
    @pytest.mark.asyncio
    async def test_first_visible_wins_and_later_are_not_evaluated(self, make_page):
        a, b, c = by_css("#a"), by_css("#b"), by_css("#c")
        page = make_page(visible=[b.label, c.label])
        trace = TraceRecorder("t1", "demo")

        resolved = await resolve(page, trace, "click", [a, b, c], 100)

        assert resolved.matched == "css=#b"
        assert page.waited == ["css=#a", "css=#b"]
        assert notes(trace) == [
            ("css=#a", "trying selector candidate"),
            ("css=#a", "selector not matched"),
            ("css=#b", "trying selector candidate"),
            ("css=#b", "selector matched"),
        ]

    @pytest.mark.asyncio
    async def test_order_is_the_callers(self, make_page):
        a, b = by_text("A"), by_text("B")
        page = make_page(visible=[a.label, b.label])

        resolved = await resolve(page, TraceRecorder("t1", "demo"), "click", [b, a], 100)
        assert resolved.matched == "text=B"

    @pytest.mark.asyncio
    async def test_exhausted_candidates_raise_selector_changed(self, make_page):
        page = make_page()
        trace = TraceRecorder("t1", "demo")

        with pytest.raises(ToolError) as exc_info:
            await resolve(page, trace, "fill", [by_css("#a"), by_label("Title")], 100)

        err = exc_info.value
        assert err.code == ToolCode.SELECTOR_CHANGED
        assert err.status == ToolStatus.FATAL_ERROR
        assert err.data == {"action": "fill", "candidates": ["css=#a", "label=Title"]}
        assert len(trace.snapshot().steps) == 4

    @pytest.mark.asyncio
    async def test_empty_candidates_fail_immediately(self, fake_page):
        trace = TraceRecorder("t1", "demo")
        with pytest.raises(ToolError) as exc_info:
            await resolve(fake_page, trace, "click", [], 100)
        assert exc_info.value.code == ToolCode.SELECTOR_CHANGED
        assert trace.snapshot().steps == ()
        assert fake_page.waited == []


class TestActions:
    @pytest.mark.asyncio
    async def test_click_with_fallback(self, make_page):
        page = make_page(visible=["role=button;name=Publish"])
        trace = TraceRecorder("t1", "demo")

        matched = await click_with_fallback(page, trace, [by_css("#old"), by_role("button", "Publish")], 100)

        assert matched == "role=button;name=Publish"
        assert page.clicked == ["role=button;name=Publish"]
        assert notes(trace)[-1] == ("role=button;name=Publish", "click done")

    @pytest.mark.asyncio
    async def test_fill_with_fallback(self, make_page):
        page = make_page(visible=["placeholder=Title"])
        trace = TraceRecorder("t1", "demo")

        await fill_with_fallback(page, trace, [by_placeholder("Title")], "hello", 100)

        assert page.filled == [("placeholder=Title", "hello")]
        assert notes(trace)[-1] == ("placeholder=Title", "fill done")

    @pytest.mark.asyncio
    async def test_click_does_not_swallow_resolver_failure(self, fake_page):
        with pytest.raises(ToolError):
            await click_with_fallback(fake_page, TraceRecorder("t1", "demo"), [by_css("#gone")], 100)
        assert fake_page.clicked == []


class TestGotoWithRetry:
    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failure(self, make_page):
        page = make_page(goto_failures=1)
        trace = TraceRecorder("t1", "demo")

        await goto_with_retry(page, "https://example.test/", trace, retries=2, timeout_ms=100)

        assert len(page.gotos) == 2
        assert page.gotos[0]["wait_until"] == "domcontentloaded"
        assert [s.note for s in trace.snapshot().steps] == ["attempt 1/3", "attempt 2/3"]

    @pytest.mark.asyncio
    async def test_gives_up_with_retryable_navigation_timeout(self, make_page):
        page = make_page(goto_failures=10)

        with pytest.raises(ToolError) as exc_info:
            await goto_with_retry(page, "https://example.test/", TraceRecorder("t1", "demo"), retries=1, timeout_ms=100)

        err = exc_info.value
        assert len(page.gotos) == 2
        assert err.code == ToolCode.NAVIGATION_TIMEOUT
        assert err.status == ToolStatus.RETRYABLE_ERROR
        assert "Timeout" in err.data["cause"]

    @pytest.mark.asyncio
    async def test_negative_retries_still_attempts_once(self, make_page):
        page = make_page()
        await goto_with_retry(page, "https://example.test/", TraceRecorder("t1", "demo"), retries=-3, timeout_ms=100)
        assert len(page.gotos) == 1


class TestRiskText:
    @pytest.mark.asyncio
    async def test_detects_needle(self, make_page):
        page = make_page(body_text="please complete the captcha below")
        assert await contains_risk_text(page, ["captcha", "verify"]) is True
        assert await contains_risk_text(page, ["sms"]) is False

    @pytest.mark.asyncio
    async def test_unreadable_body_counts_as_empty(self, fake_page):
        fake_page.body_error = True
        assert await contains_risk_text(fake_page, ["captcha"]) is False
