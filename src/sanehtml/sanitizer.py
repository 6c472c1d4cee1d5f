"""Whitelist-based HTML cleaning.

`clean_html` parses the markup and rebuilds it from scratch, keeping only what
the selected filter set allows:

- comments are always dropped
- tags in `Policy.dropped_tags` are dropped together with everything inside
- tags not in `Policy.allowed_tags` are stripped: the markup goes, the
  (filtered) content stays
- allowed tags keep only their allowed attributes (see `attributes`)
- empty containers are dropped, except page anchors
- an ``a`` or ``img`` left without attributes is demoted to its content
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Iterator

from .attributes import filter_attributes
from .constants import (
    ASCII_WHITESPACE,
    DEMOTE_WITHOUT_ATTRIBUTES,
    KEEP_WHEN_EMPTY,
    LINE_BREAK,
    VOID_ELEMENTS,
)
from .node import Comment, Element, Fragment, Node, Text
from .parser import decode_markup, parse_html
from .policy import FilterSet, Policy, as_filter_set, resolve_policy
from .rewrite import HTTPS_URL_REWRITES, replace_https_urls
from .whitespace import collapse_content, collapse_markup, collapse_whitespace

logger = logging.getLogger(__name__)


def _render_leaf(node: Node) -> str:
    if isinstance(node, Text):
        return html.escape(collapse_whitespace(node.data))
    if isinstance(node, (Comment, Element)):
        # Elements only get here when dropped
        return ""
    raise TypeError(f"Unsupported node: {type(node).__name__}")


def _render_element(node: Element, content: str, policy: Policy) -> str:
    name = node.name

    # Disallowed tags: content only
    if not name or not policy.is_allowed(name):
        return content

    attrs = filter_attributes(node, policy)

    if not attrs and name in DEMOTE_WITHOUT_ATTRIBUTES:
        return content

    if name in VOID_ELEMENTS:
        return f"<{name}{attrs}>"

    # Collapse as the final pass will, so emptiness is judged on the result
    content = collapse_content(content)
    if not content.strip(ASCII_WHITESPACE) and name not in KEEP_WHEN_EMPTY:
        return ""

    return f"<{name}{attrs}>{content}</{name}>"


def _is_container(node: Node, policy: Policy) -> bool:
    if isinstance(node, Element):
        return not policy.is_dropped(node.name)
    return isinstance(node, Fragment)


def render(node: Node, policy: Policy) -> str:
    """Serialize `node` and its descendants as allowed by `policy`."""
    if not _is_container(node, policy):
        return _render_leaf(node)

    # Post-order walk with an explicit stack, so deeply nested documents
    # render without hitting the recursion limit.
    stack: list[tuple[Element | Fragment, Iterator[Node], list[str]]] = [
        (node, iter(node.children), [])
    ]
    while True:
        current, children, parts = stack[-1]
        for child in children:
            if _is_container(child, policy):
                stack.append((child, iter(child.children), []))
                break
            parts.append(_render_leaf(child))
        else:
            stack.pop()
            content = "".join(parts)
            # The document edges are left to the final collapsing pass
            if isinstance(current, Element):
                content = _render_element(current, content, policy)
            if not stack:
                return content
            stack[-1][2].append(content)


def clean_html(
    markup: str | bytes,
    filter_set: FilterSet | str = FilterSet.MEDIA,
    *,
    encoding: str | None = None,
    url_rewrites: Iterable[tuple[str, str]] = HTTPS_URL_REWRITES,
) -> str:
    """Thoroughly clean HTML based on a filter set.

    Args:
        markup: The HTML to clean. Bytes are decoded first, trying `encoding`
            before falling back to detection.
        filter_set: One of the FilterSet values; defaults to "media".
        url_rewrites: Literal ``(needle, replacement)`` pairs applied to the
            result, case-insensitively. Pass ``()`` to skip the rewrite.

    Returns:
        The cleaned HTML. A document whose only content is a line break
        comes back as the empty string.

    Raises:
        InvalidFilterSet: `filter_set` is not a known filter set.
        MalformedHTML: the parser could not build a tree from `markup`.
    """
    filter_set = as_filter_set(filter_set)
    policy = resolve_policy(filter_set)

    if isinstance(markup, bytes):
        markup = decode_markup(markup, encoding)

    document = parse_html(collapse_markup(markup))
    cleaned = render(document, policy)

    cleaned = collapse_markup(cleaned)
    cleaned = replace_https_urls(cleaned, url_rewrites)
    cleaned = cleaned.strip(ASCII_WHITESPACE)

    # A stray line break is no visible content
    if cleaned == LINE_BREAK:
        cleaned = ""

    logger.debug(
        "Cleaned %d characters down to %d with filter set %s",
        len(markup),
        len(cleaned),
        filter_set.value,
    )
    return cleaned
