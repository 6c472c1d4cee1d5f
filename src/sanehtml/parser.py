"""Parse markup into a sanehtml node tree.

BeautifulSoup with the ``html5lib`` builder does the actual parsing. html5lib
follows the HTML5 tree-construction rules, so optional end tags are implied
(``<p>a<p>b`` gives two sibling paragraphs) and broken markup is recovered the
way browsers recover it. Only when the parser rejects the markup outright is
`MalformedHTML` raised.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from bs4 import BeautifulSoup, UnicodeDammit
from bs4.builder import ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from .errors import MalformedHTML
from .node import Comment, Element, Fragment, Node, Text

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"line (\d+)")

# Parse in no-quirks mode, where a table start tag closes an open paragraph.
_DOCTYPE = "<!DOCTYPE html>"


def decode_markup(markup: bytes, encoding: str | None = None) -> str:
    """Decode raw bytes, trying `encoding` first, then sniffing."""
    known = [encoding] if encoding else []
    dammit = UnicodeDammit(markup, known)
    if dammit.unicode_markup is None:
        raise MalformedHTML("unable to determine the character encoding")
    logger.debug("Decoded markup as %s", dammit.original_encoding)
    return dammit.unicode_markup


def _line_number(exc: BaseException) -> int | None:
    match = _LINE_RE.search(str(exc))
    if match:
        return int(match.group(1))
    return None


def _convert_leaf(element) -> Node:
    # Comment, CData, Doctype, Declaration and ProcessingInstruction
    if isinstance(element, PreformattedString):
        return Comment(str(element))

    if isinstance(element, NavigableString):
        return Text(str(element))

    raise TypeError(f"Unsupported node: {type(element).__name__}")


def _convert_element(tag: Tag, children: list[Node]) -> Element:
    attrs = []
    for key, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attrs.append((str(key).strip().lower(), "" if value is None else str(value)))
    return Element(
        name=tag.name.strip().lower(),
        attrs=tuple(attrs),
        children=tuple(children),
    )


def _convert(soup: BeautifulSoup) -> Fragment:
    # Depth-first with an explicit stack: document depth is not bounded by
    # the interpreter's recursion limit.
    stack: list[tuple[Tag, Iterator, list[Node]]] = [(soup, iter(soup.children), [])]
    while True:
        tag, children, converted = stack[-1]
        for child in children:
            if isinstance(child, Tag):
                stack.append((child, iter(child.children), []))
                break
            converted.append(_convert_leaf(child))
        else:
            stack.pop()
            if not stack:
                return Fragment(children=tuple(converted))
            stack[-1][2].append(_convert_element(tag, converted))


def parse_html(markup: str | bytes, encoding: str | None = None) -> Fragment:
    """Parse `markup` into a `Fragment` holding the top-level nodes.

    `encoding` is only consulted for bytes input. The parser always builds a
    full document, so the fragment holds a single ``html`` element (with
    ``head`` and ``body``) next to any doctype or comments.
    """
    if isinstance(markup, bytes):
        markup = decode_markup(markup, encoding)

    try:
        # Duplicate attributes: html5lib keeps the first occurrence
        soup = BeautifulSoup(_DOCTYPE + markup, "html5lib", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        logger.debug("Parser rejected markup: %s", exc)
        raise MalformedHTML(str(exc) or None, _line_number(exc)) from exc

    return _convert(soup)
