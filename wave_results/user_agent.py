"""User-agent parsing and browser-name abbreviation for result file names."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class BrowserInfo:
    """Browser name and major version extracted from a user-agent string."""

    name: str
    version: str


# Order matters: Chromium-based browsers also carry a Chrome/ token, and
# Chrome carries a Safari/ token.
_BROWSER_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("Edge", re.compile(r"\bEdg(?:e|A|iOS)?/(\d+)")),
    ("Opera", re.compile(r"\bOPR/(\d+)")),
    ("Samsung Browser", re.compile(r"\bSamsungBrowser/(\d+)")),
    ("Chromium", re.compile(r"\bChromium/(\d+)")),
    ("Chrome", re.compile(r"\b(?:Chrome|CriOS)/(\d+)")),
    ("Firefox", re.compile(r"\b(?:Firefox|FxiOS)/(\d+)")),
    ("IE", re.compile(r"\bMSIE (\d+)")),
    ("IE", re.compile(r"\bTrident/.*\brv:(\d+)")),
    ("Safari", re.compile(r"\bVersion/(\d+)(?:[.\d]*)? (?:Mobile/\S+ )?Safari/")),
    ("WebKit", re.compile(r"\bAppleWebKit/(\d+)")),
]

_ABBREVIATIONS = {
    "Chrome": "Ch",
    "Chromium": "Cm",
    "Edge": "Ed",
    "Firefox": "FF",
    "IE": "IE",
    "Opera": "Op",
    "Safari": "Sf",
    "Samsung Browser": "SB",
    "WebKit": "Wk",
}

UNKNOWN_BROWSER = BrowserInfo(name="Unknown", version="0")


def parse_user_agent(user_agent: str | None) -> BrowserInfo:
    """
    Extract browser name and major version from a user-agent string.

    Unrecognized or empty strings yield UNKNOWN_BROWSER.
    """
    if not user_agent:
        return UNKNOWN_BROWSER

    for name, pattern in _BROWSER_PATTERNS:
        match = pattern.search(user_agent)
        if match:
            return BrowserInfo(name=name, version=match.group(1))

    return UNKNOWN_BROWSER


def abbreviate_browser_name(name: str) -> str:
    """Two-letter abbreviation used in result file names ("Xx" if unknown)."""
    return _ABBREVIATIONS.get(name, "Xx")


__all__ = [
    "BrowserInfo",
    "UNKNOWN_BROWSER",
    "parse_user_agent",
    "abbreviate_browser_name",
]
