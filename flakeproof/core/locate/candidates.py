# flakeproof/core/locate/candidates.py
"""
Selector candidates - several ways to find the same logical element.

Each candidate is a frozen dataclass tagged by `kind`. `build_locator` is the
single place that maps a candidate to a driver lookup; an unknown candidate
type is a programming error and raises TypeError.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

TextPattern = Union[str, "re.Pattern[str]"]


def _pattern_str(value: TextPattern) -> str:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return str(value)


@dataclass(frozen=True)
class RoleCandidate:
    role: str
    name: TextPattern
    kind: str = "role"

    @property
    def label(self) -> str:
        return f"role={self.role};name={_pattern_str(self.name)}"


@dataclass(frozen=True)
class TextCandidate:
    text: TextPattern
    kind: str = "text"

    @property
    def label(self) -> str:
        return f"text={_pattern_str(self.text)}"


@dataclass(frozen=True)
class CssCandidate:
    css: str
    kind: str = "css"

    @property
    def label(self) -> str:
        return f"css={self.css}"


@dataclass(frozen=True)
class PlaceholderCandidate:
    placeholder: TextPattern
    kind: str = "placeholder"

    @property
    def label(self) -> str:
        return f"placeholder={_pattern_str(self.placeholder)}"


@dataclass(frozen=True)
class LabelCandidate:
    label_text: TextPattern
    kind: str = "label"

    @property
    def label(self) -> str:
        return f"label={_pattern_str(self.label_text)}"


Candidate = Union[
    RoleCandidate,
    TextCandidate,
    CssCandidate,
    PlaceholderCandidate,
    LabelCandidate,
]


def build_locator(page: Any, candidate: Candidate) -> Any:
    """Map a candidate to a Playwright locator on `page`."""
    if isinstance(candidate, RoleCandidate):
        return page.get_by_role(candidate.role, name=candidate.name)
    if isinstance(candidate, TextCandidate):
        return page.get_by_text(candidate.text)
    if isinstance(candidate, CssCandidate):
        return page.locator(candidate.css)
    if isinstance(candidate, PlaceholderCandidate):
        return page.get_by_placeholder(candidate.placeholder)
    if isinstance(candidate, LabelCandidate):
        return page.get_by_label(candidate.label_text)
    raise TypeError(f"unsupported selector candidate: {candidate!r}")


# Shorthand constructors for call sites that build candidate lists inline.

def by_role(role: str, name: TextPattern) -> RoleCandidate:
    return RoleCandidate(role=role, name=name)


def by_text(text: TextPattern) -> TextCandidate:
    return TextCandidate(text=text)


def by_css(css: str) -> CssCandidate:
    return CssCandidate(css=css)


def by_placeholder(placeholder: TextPattern) -> PlaceholderCandidate:
    return PlaceholderCandidate(placeholder=placeholder)


def by_label(label: TextPattern) -> LabelCandidate:
    return LabelCandidate(label_text=label)


__all__ = [
    "TextPattern",
    "RoleCandidate",
    "TextCandidate",
    "CssCandidate",
    "PlaceholderCandidate",
    "LabelCandidate",
    "Candidate",
    "build_locator",
    "by_role",
    "by_text",
    "by_css",
    "by_placeholder",
    "by_label",
]
