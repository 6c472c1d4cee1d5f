"""Whitespace and line-break collapsing.

Applied to the raw markup before parsing and again to the serialized output,
since filtering can bring decorative patterns back together.
"""

from __future__ import annotations

import re

from .constants import ASCII_WHITESPACE, LINE_BREAK

_WHITESPACE_RE = re.compile(f"[{re.escape(ASCII_WHITESPACE)}]+")
_LINE_BREAKS_RE = re.compile(f"(?:{re.escape(LINE_BREAK)})+")


def collapse_whitespace(text: str) -> str:
    """Reduce every run of ASCII whitespace to a single space."""
    return _WHITESPACE_RE.sub(" ", text)


def collapse_markup(html: str) -> str:
    """Collapse whitespace and decorative line breaks in serialized markup.

    - whitespace runs become one space, and whitespace between two tags goes
    - repeated ``<br>`` elements become one
    - a ``<br>`` right before a closing tag, or right after a tag, goes
    """
    html = collapse_whitespace(html)
    html = html.replace("> <", "><")

    html = _LINE_BREAKS_RE.sub(LINE_BREAK, html)
    html = html.replace(LINE_BREAK + "</", "</")
    return html.replace(">" + LINE_BREAK, ">")


def collapse_content(html: str) -> str:
    """Collapse the content of an element as `collapse_markup` would in place.

    The content is collapsed between a stand-in opening and closing tag, so a
    leading or trailing ``<br>`` disappears here and not only in the final
    pass. The stand-ins always survive and are cut off again.
    """
    return collapse_markup(">" + html + "</")[1:-2]
