"""Rewrite known insecure URL prefixes to their secure form.

This is a fixed lookup table of literal, case-insensitive substitutions, not
URL parsing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

HTTPS_URL_REWRITES: tuple[tuple[str, str], ...] = (
    # CDN resources
    ("http://cdn.prtl.eu", "//cdn.prtl.eu"),
    ("http://cdn2.prtl.eu", "//cdn2.prtl.eu"),
    ("http://studyportals-cdn2.imgix.net", "//studyportals-cdn2.imgix.net"),
    # Portal urls
    ("http://www.admissiontestportal.com", "https://www.admissiontestportal.com"),
    ("http://www.preparationcoursesportal.com", "https://www.preparationcoursesportal.com"),
)


def replace_https_urls(value: str, rewrites: Iterable[tuple[str, str]] = HTTPS_URL_REWRITES) -> str:
    """Apply each ``(needle, replacement)`` pair in order, ignoring case."""
    for needle, replacement in rewrites:
        if not needle:
            continue
        value = re.sub(re.escape(needle), lambda _match, r=replacement: r, value, flags=re.IGNORECASE)
    return value
