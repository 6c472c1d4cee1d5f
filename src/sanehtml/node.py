"""Read-only document tree handed from the parser to the sanitizer.

The tree is a small tagged union: `Fragment` (the nameless root container),
`Element`, `Text` and `Comment`. Nodes are immutable; the sanitizer never
changes the tree, it only serializes a filtered copy of it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Text:
    data: str

    name = "#text"


@dataclass(frozen=True, slots=True)
class Comment:
    """Comments and other markup-only nodes (doctype, CDATA, PIs)."""

    data: str = ""

    name = "#comment"


@dataclass(frozen=True, slots=True)
class Element:
    name: str
    # Attribute (name, value) pairs in source order
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple[Node, ...] = ()


@dataclass(frozen=True, slots=True)
class Fragment:
    children: tuple[Node, ...] = ()

    name = "#document-fragment"


Node = Fragment | Element | Text | Comment
