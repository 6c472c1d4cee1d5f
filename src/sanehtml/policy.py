"""Filter sets and the policies they resolve to.

A filter set is a named bundle of allow-list rules. Each one is built from
one or more *layers* (plain data) and may extend other filter sets. Resolving
a filter set merges everything it inherits into a single immutable `Policy`.

Policy data model:

- `allowed_tags`: tags that are kept. Tags not in this set are stripped, but
  their content (and any allowed descendants) remains.
- `dropped_tags`: tags removed together with their whole subtree.
- `attribute_rules`: tag name -> allowed attribute names, plus the reserved
  keys `*` (attributes allowed on every tag), `*.schemes` (URI schemes allowed
  in absolute `href`/`src` values) and `*.types-href` (allowed link types for
  `href`: absolute, relative, anchor).

Merging is a pure union: a filter set can never lose a rule granted by a
filter set it extends.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType

from .constants import ALLOWED_HREF_TYPES, ALLOWED_SCHEMES, GLOBAL_ATTRIBUTES
from .errors import InvalidFilterSet

logger = logging.getLogger(__name__)


class FilterSet(str, enum.Enum):
    # Very basic tags to allow visitors to write text
    STRICT = "strict"
    # Strict plus small headings and title/class attributes, but no links
    BASIC = "basic"
    # Paragraphs and lists only, combined with the media tags
    LIMITED = "limited"
    # Basic plus links
    LINK = "link"
    # Link plus media tags
    MEDIA = "media"


def _freeze_rules(rules: Mapping[str, Collection[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({str(key): frozenset(values) for key, values in rules.items()})


def _merge_rules(
    base: Mapping[str, frozenset[str]], extra: Mapping[str, frozenset[str]]
) -> Mapping[str, frozenset[str]]:
    merged = dict(base)
    for key, values in extra.items():
        merged[key] = merged.get(key, frozenset()) | values
    return MappingProxyType(merged)


@dataclass(frozen=True, slots=True)
class Policy:
    """Resolved allow-list policy for one filter set.

    All tag and attribute names are expected to be ASCII-lowercase.
    """

    allowed_tags: Collection[str] = field(default_factory=frozenset)
    dropped_tags: Collection[str] = field(default_factory=frozenset)
    attribute_rules: Mapping[str, Collection[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Normalize to frozensets / read-only mappings so a resolved policy
        # can be shared freely.
        if not isinstance(self.allowed_tags, frozenset):
            object.__setattr__(self, "allowed_tags", frozenset(self.allowed_tags))
        if not isinstance(self.dropped_tags, frozenset):
            object.__setattr__(self, "dropped_tags", frozenset(self.dropped_tags))
        if not isinstance(self.attribute_rules, MappingProxyType) or any(
            not isinstance(v, frozenset) for v in self.attribute_rules.values()
        ):
            object.__setattr__(self, "attribute_rules", _freeze_rules(self.attribute_rules))

    def merge(self, other: Policy) -> Policy:
        """Return the union of this policy and `other`."""
        return Policy(
            allowed_tags=self.allowed_tags | other.allowed_tags,
            dropped_tags=self.dropped_tags | other.dropped_tags,
            attribute_rules=_merge_rules(self.attribute_rules, other.attribute_rules),
        )

    def is_allowed(self, tag: str) -> bool:
        return tag in self.allowed_tags

    def is_dropped(self, tag: str) -> bool:
        return tag in self.dropped_tags

    def attributes_for(self, tag: str) -> frozenset[str]:
        """Attribute names allowed on `tag`, including the global ones."""
        return self.attribute_rules.get(tag, frozenset()) | self.global_attributes

    @property
    def global_attributes(self) -> frozenset[str]:
        return self.attribute_rules.get(GLOBAL_ATTRIBUTES, frozenset())

    @property
    def schemes(self) -> frozenset[str]:
        return self.attribute_rules.get(ALLOWED_SCHEMES, frozenset())

    @property
    def href_types(self) -> frozenset[str]:
        return self.attribute_rules.get(ALLOWED_HREF_TYPES, frozenset())


# A layer is the data one tier contributes; it is a Policy by shape.
PolicyLayer = Policy


STRICT_LAYER = PolicyLayer(
    allowed_tags=["u", "del", "strong", "em", "p", "br", "ol", "ul", "li"],
    dropped_tags=["style", "script", "head"],
)

BASIC_LAYER = PolicyLayer(
    allowed_tags=["h4", "h5", "h6"],
    attribute_rules={
        GLOBAL_ATTRIBUTES: ["title", "class"],
        ALLOWED_SCHEMES: ["http", "https"],
        ALLOWED_HREF_TYPES: ["absolute", "relative", "anchor"],
    },
)

LINK_LAYER = PolicyLayer(
    allowed_tags=["a"],
    attribute_rules={
        "a": ["href", "target", "name"],
    },
)

MEDIA_LAYER = PolicyLayer(
    allowed_tags=["img", "video", "source", "track", "embed"],
    attribute_rules={
        "img": ["src", "alt", "width", "height", "data-align", "class", "data-id", "data-src"],
    },
)

LIMITED_LAYER = PolicyLayer(
    allowed_tags=["p", "ol", "ul", "li"],
    dropped_tags=["style", "script", "head"],
)


@dataclass(frozen=True, slots=True)
class FilterSetDefinition:
    """How a filter set is composed: inherited filter sets, then own layers."""

    extends: tuple[FilterSet, ...] = ()
    layers: tuple[PolicyLayer, ...] = ()


# Limited extends nothing: its own layer plus the media layer, without the
# strict/basic/link chain.
FILTER_SETS: Mapping[FilterSet, FilterSetDefinition] = MappingProxyType(
    {
        FilterSet.STRICT: FilterSetDefinition(layers=(STRICT_LAYER,)),
        FilterSet.BASIC: FilterSetDefinition(extends=(FilterSet.STRICT,), layers=(BASIC_LAYER,)),
        FilterSet.LINK: FilterSetDefinition(extends=(FilterSet.BASIC,), layers=(LINK_LAYER,)),
        FilterSet.MEDIA: FilterSetDefinition(extends=(FilterSet.LINK,), layers=(MEDIA_LAYER,)),
        FilterSet.LIMITED: FilterSetDefinition(layers=(LIMITED_LAYER, MEDIA_LAYER)),
    }
)


def as_filter_set(value: FilterSet | str) -> FilterSet:
    """Coerce `value` to a FilterSet, raising InvalidFilterSet when unknown."""
    if isinstance(value, FilterSet):
        return value
    try:
        return FilterSet(value)
    except ValueError:
        raise InvalidFilterSet(value) from None


@lru_cache(maxsize=None)
def _resolve(filter_set: FilterSet) -> Policy:
    definition = FILTER_SETS[filter_set]
    policy = Policy()
    for base in definition.extends:
        policy = policy.merge(_resolve(base))
    for layer in definition.layers:
        policy = policy.merge(layer)
    logger.debug(
        "Resolved filter set %s: %d allowed tags, %d dropped tags",
        filter_set.value,
        len(policy.allowed_tags),
        len(policy.dropped_tags),
    )
    return policy


def resolve_policy(filter_set: FilterSet | str = FilterSet.MEDIA) -> Policy:
    """Return the fully merged policy for `filter_set`.

    Raises InvalidFilterSet for names that are not one of the FilterSet values;
    there is no silent fallback to another policy.
    """
    return _resolve(as_filter_set(filter_set))
