"""Exceptions raised by sanehtml.

Policy decisions (unknown tags, disallowed attributes, unsupported schemes)
are never errors. Only two things are: asking for a filter set that does not
exist, and handing in markup the parser cannot turn into a tree at all.
"""

from __future__ import annotations


class SanitizeError(Exception):
    """Base class for all sanehtml errors."""


class InvalidFilterSet(SanitizeError, ValueError):
    """Raised when an unknown filter-set name is requested."""

    def __init__(self, filter_set: object) -> None:
        self.filter_set = filter_set
        super().__init__(f"Unknown filter set: {filter_set!r}")


class MalformedHTML(SanitizeError, ValueError):
    """Raised when the parser could not produce a document tree."""

    def __init__(self, reason: str | None = None, line: int | None = None) -> None:
        self.reason = reason
        self.line = line

        message = "Invalid HTML provided"
        if reason:
            message += f", parser reports: {reason}"
        if line is not None:
            message += f" (line {line})"
        super().__init__(message)
