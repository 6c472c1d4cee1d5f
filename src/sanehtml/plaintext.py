"""Convert cleaned HTML to plain text.

Only meant for output of `clean_html`: the conversion substitutes literal tag
tokens and never parses the markup, so raw untrusted HTML gives undefined
results.
"""

from __future__ import annotations

import html
import re

from .constants import ASCII_WHITESPACE, LINE_BREAK

_BULLET = " * "

_DOUBLE_BREAK_TAGS = ("</p>", "</h1>", "</h2>", "</h3>")
_SINGLE_BREAK_TAGS = ("</ul>", "</ol>", LINE_BREAK, "</li>", "</h4>", "</h5>", "</h6>")

_TAG_RE = re.compile(r"</?.*?>")
_URL_RE = re.compile(r"(?:(?:https?://(?:www\.)?)|(?:www\.))\S+\s?", re.IGNORECASE)


def convert_to_plain_text(markup: str, strip_urls: bool = False, html_format: bool = False) -> str:
    """Convert (clean) HTML into plain text, keeping some basic layout.

    List items become " * " bullets, paragraphs and large headings end in a
    blank line, and list ends, line breaks and small headings in a newline.
    All remaining tags are removed and entities decoded.

    With `strip_urls`, everything resembling a URL (starting with "http://",
    "https://" or "www.") is removed as well.

    With `html_format`, the text is made displayable inside an HTML document:
    entities are re-encoded, newlines become ``<br>`` and the whole is wrapped
    in one paragraph.
    """
    text = markup.replace("<li>", _BULLET)
    for tag in _DOUBLE_BREAK_TAGS:
        text = text.replace(tag, "\n\n")
    for tag in _SINGLE_BREAK_TAGS:
        text = text.replace(tag, "\n")

    text = _TAG_RE.sub("", text)

    if strip_urls:
        text = _URL_RE.sub("", text)

    text = html.unescape(text).strip(ASCII_WHITESPACE)

    if html_format:
        text = html.escape(text).replace("\n", LINE_BREAK)
        text = f"<p>{text}</p>"

    return text
