"""Value kinds, cluster resolution and the rule naming convention.

A *kind* is the name the transformer uses to address conversion rules.  Many
concrete runtime types share one *umbrella* kind (``str`` and
``MutableString`` are both ``"string"``), so callers canonicalise a runtime
type with ``resolve_cluster_kind`` before looking a rule up.

Exports
-------
CLUSTER_MAP
    Read-only mapping ``type name → umbrella kind``.

PROPERTY_KINDS
    Read-only mapping ``declared property type name → target kind``.

resolve_cluster_kind / kind_of / kind_for_property
    Table lookups over the two maps above.

rule_name
    Build the ``<ToKind>From<FromKind>`` name of a rule.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

# ─────────────────────────────────────────────────────────────────────────────
# Built-in kinds
# ─────────────────────────────────────────────────────────────────────────────

STRING = "string"
MUTABLE_STRING = "mutable-string"
NUMBER = "number"
DECIMAL = "decimal"
BOOL = "bool"
ARRAY = "array"
MUTABLE_ARRAY = "mutable-array"
DICTIONARY = "dictionary"
MUTABLE_DICTIONARY = "mutable-dictionary"
SET = "set"
MUTABLE_SET = "mutable-set"
URL = "url"
TIME_ZONE = "time-zone"
DATE = "date"
NULL = "null"

#: Encode target: "whatever JSON-native representation fits".
JSON_OBJECT = "json"

# ─────────────────────────────────────────────────────────────────────────────
# Cluster map
# ─────────────────────────────────────────────────────────────────────────────

CLUSTER_MAP: Mapping[str, str] = MappingProxyType({
    # strings
    "str": STRING,
    "UserString": STRING,
    "MutableString": STRING,
    # numbers (bool is an int subtype and JSON true/false land here too)
    "int": NUMBER,
    "float": NUMBER,
    "bool": NUMBER,
    "Decimal": DECIMAL,
    # arrays
    "list": ARRAY,
    "tuple": ARRAY,
    # dictionaries
    "dict": DICTIONARY,
    "OrderedDict": DICTIONARY,
    "defaultdict": DICTIONARY,
    "mappingproxy": DICTIONARY,
    # sets
    "frozenset": SET,
    "set": MUTABLE_SET,
    # richer values
    "SplitResult": URL,
    "URLValue": URL,
    "ParseResult": URL,
    "ZoneInfo": TIME_ZONE,
    "datetime": DATE,
    "NoneType": NULL,
})

PROPERTY_KINDS: Mapping[str, str] = MappingProxyType({
    "str": STRING,
    "MutableString": MUTABLE_STRING,
    "int": NUMBER,
    "float": NUMBER,
    "bool": BOOL,
    "Decimal": DECIMAL,
    "tuple": ARRAY,
    "list": MUTABLE_ARRAY,
    "mappingproxy": DICTIONARY,
    "MappingProxyType": DICTIONARY,
    "dict": MUTABLE_DICTIONARY,
    "frozenset": SET,
    "set": MUTABLE_SET,
    "SplitResult": URL,
    "URLValue": URL,
    "ZoneInfo": TIME_ZONE,
    "datetime": DATE,
})

# PascalCase spellings that do not follow the word-split rule.
_NAME_OVERRIDES: Mapping[str, str] = MappingProxyType({
    JSON_OBJECT: "JSONObject",
    URL: "URL",
    BOOL: "BOOL",
})


def _type_name(source_type: Any) -> str:
    return source_type if isinstance(source_type, str) else source_type.__name__


def resolve_cluster_kind(source_type: Any) -> str | None:
    """Return the umbrella kind for *source_type*, or ``None`` if unlisted.

    *source_type* is a type name (``"MutableString"``) or a class.  Only exact
    table hits count; subclasses of listed types are not resolved.
    """
    return CLUSTER_MAP.get(_type_name(source_type))


def kind_of(value: Any) -> str:
    """Kind of a runtime value, falling back to its bare type name."""
    name = type(value).__name__
    return CLUSTER_MAP.get(name, name)


def kind_for_property(property_type: Any) -> str | None:
    """Target kind for a declared property type (class or name)."""
    return PROPERTY_KINDS.get(_type_name(property_type))


def is_null(value: Any) -> bool:
    """True for a JSON ``null`` (decoded as ``None``)."""
    return value is None


def kind_title(kind: str) -> str:
    """PascalCase spelling of *kind* used in rule names.

    ::

        kind_title("mutable-string")  # "MutableString"
        kind_title("json")            # "JSONObject"
    """
    if kind in _NAME_OVERRIDES:
        return _NAME_OVERRIDES[kind]
    return "".join(part[:1].upper() + part[1:] for part in kind.replace("_", "-").split("-"))


def rule_name(from_kind: str, to_kind: str) -> str:
    """``<ToKind>From<FromKind>``, e.g. ``rule_name("string", "number")`` → ``NumberFromString``."""
    return f"{kind_title(to_kind)}From{kind_title(from_kind)}"
