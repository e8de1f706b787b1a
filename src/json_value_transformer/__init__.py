"""Two-way value conversion between decoded JSON and richer Python types."""

from .casters import BUILTIN_RULES, DEFAULT_RULES, make_date_encoder
from .factory import build_default_transformer
from .kinds import (
    CLUSTER_MAP,
    PROPERTY_KINDS,
    is_null,
    kind_for_property,
    kind_of,
    resolve_cluster_kind,
    rule_name,
)
from .mutable import MutableString
from .registry import ConversionRegistry, ConversionRule
from .transformer import ValueTransformer
from .urls import URLValue

__version__ = "1.0.0"
__all__ = [
    "BUILTIN_RULES",
    "DEFAULT_RULES",
    "make_date_encoder",
    "build_default_transformer",
    "CLUSTER_MAP",
    "PROPERTY_KINDS",
    "is_null",
    "kind_for_property",
    "kind_of",
    "resolve_cluster_kind",
    "rule_name",
    "MutableString",
    "ConversionRegistry",
    "ConversionRule",
    "ValueTransformer",
    "URLValue",
]
