"""ValueTransformer — the facade a JSON-mapping engine talks to.

The engine knows a value and the kind it wants; the transformer works out
the value's own kind, finds the rule for the pair and applies it::

    decode("1", "number")            → 1
    encode(1, "string")              → "1"
    encode(frozenset({"a"}))         → ["a"]
    transform("NumberFromString", "1") → 1

Contract with the engine:

* no rule for the pair → the value comes back unchanged;
* a rule that cannot convert its input → ``None`` for that value only;
* nothing here raises on bad data.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from . import kinds
from .registry import ConversionRegistry, ConversionRule

#: Exceptions a misbehaving caster may raise; they degrade to ``None``.
CASTER_ERRORS = (ValueError, TypeError, ArithmeticError, LookupError)


class ValueTransformer:
    """Resolve value kinds and run conversion rules from a registry.

    Args:
        registry: Rule table.  ``build_default_transformer`` wires one with
                  the built-in and default rules.
        logger:   Optional logger instance.
    """

    def __init__(self, registry: ConversionRegistry, logger: Optional[logging.Logger] = None) -> None:
        self.registry = registry
        self.logger = logger or logging.getLogger(__name__)

    # -- kinds --------------------------------------------------------------

    @staticmethod
    def resolve_cluster_kind(source_type: Any) -> Optional[str]:
        """Umbrella kind of a type (or type name), ``None`` if not listed."""
        return kinds.resolve_cluster_kind(source_type)

    @staticmethod
    def kind_of(value: Any) -> str:
        return kinds.kind_of(value)

    # -- rule lookup --------------------------------------------------------

    def rule(self, from_kind: str, to_kind: str) -> Optional[ConversionRule]:
        return self.registry.resolve(from_kind, to_kind)

    def rule_named(self, name: str) -> Optional[ConversionRule]:
        """Rule registered under ``<ToKind>From<FromKind>``."""
        return self.registry.resolve_name(name)

    def has_rule(self, from_kind: str, to_kind: str) -> bool:
        return self.registry.resolve(from_kind, to_kind) is not None

    def rules(self) -> List[ConversionRule]:
        return self.registry.rules()

    # -- extension ----------------------------------------------------------

    def register(self, from_kind: str, to_kind: str, fn: Callable[[Any], Any]) -> ConversionRule:
        """Register an override; it wins over any built-in for the same pair."""
        rule = self.registry.register(from_kind, to_kind, fn)
        self.logger.debug(f"Registered override {rule.name}")
        return rule

    def register_conversion(self, from_kind: str, to_kind: str) -> Callable[[Callable[[Any], Any]], Callable[[Any], Any]]:
        return self.registry.register_conversion(from_kind, to_kind)

    def unregister(self, from_kind: str, to_kind: str) -> bool:
        return self.registry.unregister(from_kind, to_kind)

    # -- conversion ---------------------------------------------------------

    def decode(self, value: Any, to_kind: str, *, from_kind: Optional[str] = None) -> Any:
        """Convert a decoded JSON value toward *to_kind*.

        *from_kind* overrides the kind derived from ``type(value)``.
        """
        if kinds.is_null(value):
            return None
        source_kind = from_kind or kinds.kind_of(value)
        if source_kind == to_kind:
            return value
        rule = self.registry.resolve(source_kind, to_kind)
        if rule is None:
            self.logger.debug(
                f"No conversion {kinds.rule_name(source_kind, to_kind)}, passing value through"
            )
            return value
        return self._apply(rule, value)

    def encode(self, value: Any, to_kind: str = kinds.JSON_OBJECT, *, from_kind: Optional[str] = None) -> Any:
        """Convert a model value back to a JSON-representable one.

        With the default *to_kind* the ``JSONObjectFrom<FromKind>`` rule is
        used; values without such a rule are assumed JSON-native already.
        """
        return self.decode(value, to_kind, from_kind=from_kind)

    def transform(self, name: str, value: Any) -> Any:
        """Apply the rule named *name*; unknown names pass *value* through."""
        rule = self.registry.resolve_name(name)
        if rule is None:
            self.logger.debug(f"No conversion named {name}, passing value through")
            return value
        return self._apply(rule, value)

    def _apply(self, rule: ConversionRule, value: Any) -> Any:
        try:
            result = rule(value)
        except CASTER_ERRORS as e:
            self.logger.warning(f"Conversion {rule.name} failed for {value!r}: {e}")
            return None
        if result is None:
            self.logger.debug(f"Conversion {rule.name} rejected {value!r}")
        return result
