"""Constants shared by the sanitizer, the attribute filter and the projector."""

# Elements rendered without content or closing tag
VOID_ELEMENTS = frozenset({"br", "hr", "input", "img"})

# Allowed elements that are worthless once all their attributes are gone
DEMOTE_WITHOUT_ATTRIBUTES = frozenset({"a", "img"})

# Empty elements of these types are kept (page anchors)
KEEP_WHEN_EMPTY = frozenset({"a"})

# Class tokens left behind by word processors (case-sensitive prefixes)
EDITOR_CLASS_PREFIXES = ("Mso",)

# Attributes holding a URL
URL_ATTRIBUTES = frozenset({"href", "src"})

# Link types understood by the "*.types-href" rule
LINK_ABSOLUTE = "absolute"
LINK_RELATIVE = "relative"
LINK_ANCHOR = "anchor"

# Reserved keys in Policy.attribute_rules
GLOBAL_ATTRIBUTES = "*"
ALLOWED_SCHEMES = "*.schemes"
ALLOWED_HREF_TYPES = "*.types-href"

# ASCII whitespace; a non-breaking space is content, never decoration
ASCII_WHITESPACE = " \t\n\r\f\v"

LINE_BREAK = "<br>"
