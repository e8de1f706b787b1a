"""Transformer factory — the single place where the rule tables are wired.

``build_default_transformer`` is the recommended entry point.

Customisation points:

* **rules**            – extra ``(from_kind, to_kind) → caster`` entries,
                         registered as overrides.
* **include_defaults** – keep the string/date fallback rules (default on).
* **date_format**      – ``strftime`` format of the fallback date encoder.
* **logger**           – logger handed to the transformer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Tuple

from . import kinds
from .casters import BUILTIN_RULES, DEFAULT_RULES, DEFAULT_DATE_FORMAT, make_date_encoder
from .registry import ConversionRegistry
from .transformer import ValueTransformer


def build_default_transformer(
        *,
        rules: Mapping[Tuple[str, str], Callable[[Any], Any]] | None = None,
        include_defaults: bool = True,
        date_format: str = DEFAULT_DATE_FORMAT,
        logger: logging.Logger | None = None,
) -> ValueTransformer:
    """Assemble a ValueTransformer with the standard catalog.

    What gets wired
    ---------------
    built-ins
        Mutable copies (string, array, dictionary), sets, booleans,
        number/string, decimal/string, URL, time zone, epoch-number → date.

    defaults
        ``string → date`` and ``date → json`` fallbacks, only consulted when
        no override or built-in covers the pair.

    overrides
        Everything in *rules*.

    Args:
        rules:            Extra casters keyed by ``(from_kind, to_kind)``.
        include_defaults: ``False`` drops the string/date fallbacks.
        date_format:      Output format of the fallback ``date → json`` rule.
        logger:           Optional logger instance.

    Returns:
        A ready ``ValueTransformer``.

    Example::

        transformer = build_default_transformer()
        transformer.decode("42", "number")   # → 42
        transformer.encode(42, "string")     # → "42"
    """
    defaults = {}
    if include_defaults:
        defaults = dict(DEFAULT_RULES)
        if date_format != DEFAULT_DATE_FORMAT:
            defaults[(kinds.DATE, kinds.JSON_OBJECT)] = make_date_encoder(date_format)

    registry = ConversionRegistry(builtins=BUILTIN_RULES, defaults=defaults)
    for (from_kind, to_kind), fn in (rules or {}).items():
        registry.register(from_kind, to_kind, fn)

    return ValueTransformer(registry, logger=logger)
