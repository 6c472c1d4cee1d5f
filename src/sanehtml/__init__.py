import logging

from .attributes import filter_attributes
from .errors import InvalidFilterSet, MalformedHTML, SanitizeError
from .plaintext import convert_to_plain_text
from .policy import FILTER_SETS, FilterSet, Policy, resolve_policy
from .rewrite import HTTPS_URL_REWRITES, replace_https_urls
from .sanitizer import clean_html, render

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FILTER_SETS",
    "HTTPS_URL_REWRITES",
    "FilterSet",
    "InvalidFilterSet",
    "MalformedHTML",
    "Policy",
    "SanitizeError",
    "clean_html",
    "convert_to_plain_text",
    "filter_attributes",
    "render",
    "replace_https_urls",
    "resolve_policy",
]
