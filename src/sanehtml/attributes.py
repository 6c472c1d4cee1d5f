"""Attribute filtering for a single element."""

from __future__ import annotations

import html

from .constants import (
    ASCII_WHITESPACE,
    EDITOR_CLASS_PREFIXES,
    LINK_ABSOLUTE,
    LINK_ANCHOR,
    LINK_RELATIVE,
    URL_ATTRIBUTES,
)
from .node import Element
from .policy import Policy
from .whitespace import collapse_whitespace

# A scheme delimiter only counts when it comes before any of these
_PATH_DELIMITERS = "/?#"


def classify_url(value: str) -> tuple[str, str | None]:
    """Return ``(link_type, scheme)`` for a URL-valued attribute.

    The type is "absolute" when a ":" occurs before the path, query or
    fragment; the scheme is then the lower-cased text before it. Values that
    start with "#" are anchors, anything else is relative.
    """
    colon = value.find(":")
    if colon != -1 and not any(ch in _PATH_DELIMITERS for ch in value[:colon]):
        return LINK_ABSOLUTE, value[:colon].lower()
    if value.startswith("#"):
        return LINK_ANCHOR, None
    return LINK_RELATIVE, None


def clean_class(value: str) -> str | None:
    """Drop editor clutter (e.g. MsoNormal) from a class list.

    Returns None when no class token survives.
    """
    tokens = [token for token in value.split() if not token.startswith(EDITOR_CLASS_PREFIXES)]
    if not tokens:
        return None
    return " ".join(tokens)


def _clean_url(name: str, value: str, policy: Policy) -> str | None:
    link_type, scheme = classify_url(value)
    if link_type == LINK_ABSOLUTE and scheme not in policy.schemes:
        return None
    # Only "href" carries the anchor/relative/absolute restriction
    if name == "href" and link_type not in policy.href_types:
        return None
    return value


def clean_attribute(name: str, value: str, policy: Policy) -> str | None:
    """Return the value to keep for an allowed attribute, or None to drop it."""
    value = collapse_whitespace(value).strip(ASCII_WHITESPACE)
    if name == "class":
        return clean_class(value)
    if name in URL_ATTRIBUTES:
        return _clean_url(name, value, policy)
    return value


def filter_attributes(node: Element, policy: Policy) -> str:
    """Serialize the attributes of `node` that `policy` allows.

    Returns a fragment ready to splice into a start tag: either the empty
    string or the kept attributes, in source order, each preceded by a space.
    """
    if not node.attrs:
        return ""

    allowed = policy.attributes_for(node.name)
    parts = []
    for name, value in node.attrs:
        if name not in allowed:
            continue
        value = clean_attribute(name, value, policy)
        if value is None:
            continue
        parts.append(f'{html.escape(name)}="{html.escape(value)}"')

    if not parts:
        return ""
    return " " + " ".join(parts)
