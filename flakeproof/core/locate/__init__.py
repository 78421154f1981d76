# flakeproof/core/locate/__init__.py
"""
Target resolution for flakeproof.

No side effects on import.
"""

from .candidates import (
    Candidate,
    CssCandidate,
    LabelCandidate,
    PlaceholderCandidate,
    RoleCandidate,
    TextCandidate,
    build_locator,
    by_css,
    by_label,
    by_placeholder,
    by_role,
    by_text,
)
from .resolver import (
    Resolved,
    click_with_fallback,
    contains_risk_text,
    fill_with_fallback,
    goto_with_retry,
    resolve,
)

__all__ = [
    "Candidate",
    "CssCandidate",
    "LabelCandidate",
    "PlaceholderCandidate",
    "RoleCandidate",
    "TextCandidate",
    "build_locator",
    "by_css",
    "by_label",
    "by_placeholder",
    "by_role",
    "by_text",
    "Resolved",
    "click_with_fallback",
    "contains_risk_text",
    "fill_with_fallback",
    "goto_with_retry",
    "resolve",
]
