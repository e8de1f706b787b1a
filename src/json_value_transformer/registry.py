"""Conversion-rule registry.

Rules are addressed by an ordered ``(from_kind, to_kind)`` pair and, for
callers that build names, by ``<ToKind>From<FromKind>``.  Resolution walks
three layers and the first hit wins::

    overrides   ← register() / register_conversion()
    built-ins   ← casters.BUILTIN_RULES
    defaults    ← casters.DEFAULT_RULES (string/date fallbacks)

Built-in and default layers are fixed at construction.  Only the override
layer changes afterwards, and every write to it happens under a lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from .kinds import rule_name

Caster = Callable[[Any], Any]
RuleKey = Tuple[str, str]


@dataclass(frozen=True)
class ConversionRule:
    """A single ``from_kind → to_kind`` conversion.

    Attributes:
        from_kind: Kind of the incoming value.
        to_kind:   Kind the caster produces.
        fn:        The caster itself, ``value → value``.
        name:      ``<ToKind>From<FromKind>`` name of the rule.
        origin:    ``"override"``, ``"builtin"`` or ``"default"``.
    """

    from_kind: str
    to_kind: str
    fn: Caster
    name: str
    origin: str = "builtin"

    def __call__(self, value: Any) -> Any:
        return self.fn(value)


def _check_key(from_kind: Any, to_kind: Any) -> RuleKey:
    for kind in (from_kind, to_kind):
        if not isinstance(kind, str) or not kind:
            raise ValueError(f"Kind must be a non-empty string, got {kind!r}")
    return from_kind, to_kind


def _build_layer(rules: Mapping[RuleKey, Caster], origin: str) -> Dict[RuleKey, ConversionRule]:
    layer: Dict[RuleKey, ConversionRule] = {}
    for key, fn in rules.items():
        from_kind, to_kind = _check_key(*key)
        layer[key] = ConversionRule(from_kind, to_kind, fn, rule_name(from_kind, to_kind), origin)
    return layer


class ConversionRegistry:
    """Layered ``(from_kind, to_kind) → ConversionRule`` table.

    Lookups are plain dict reads and need no locking.  ``register`` and
    ``unregister`` copy-and-swap the override layer under ``self._lock`` so
    a concurrent reader always sees a complete table.
    """

    def __init__(
            self,
            builtins: Mapping[RuleKey, Caster] | None = None,
            defaults: Mapping[RuleKey, Caster] | None = None,
    ) -> None:
        self._builtins = _build_layer(builtins or {}, "builtin")
        self._defaults = _build_layer(defaults or {}, "default")
        self._overrides: Dict[RuleKey, ConversionRule] = {}
        self._lock = threading.RLock()

    # -- registration -------------------------------------------------------

    def register(self, from_kind: str, to_kind: str, fn: Caster, *, replace: bool = True) -> ConversionRule:
        """Register *fn* as an override for ``(from_kind, to_kind)``.

        Overrides shadow built-in and default rules for the same pair.  With
        ``replace=False`` a second override for the same pair is rejected.
        """
        key = _check_key(from_kind, to_kind)
        if not callable(fn):
            raise TypeError(f"Caster for {key!r} must be callable, got {type(fn).__name__}")
        rule = ConversionRule(from_kind, to_kind, fn, rule_name(from_kind, to_kind), "override")
        with self._lock:
            if not replace and key in self._overrides:
                raise ValueError(f"Override for '{rule.name}' is already registered")
            overrides = dict(self._overrides)
            overrides[key] = rule
            self._overrides = overrides
        return rule

    def register_conversion(self, from_kind: str, to_kind: str) -> Callable[[Caster], Caster]:
        """Decorator form of ``register``.

        ::

            @registry.register_conversion("string", "color")
            def color_from_string(value): ...
        """

        def decorator(func: Caster) -> Caster:
            self.register(from_kind, to_kind, func)
            return func

        return decorator

    def unregister(self, from_kind: str, to_kind: str) -> bool:
        """Drop the override for a pair.  Returns ``False`` if there was none."""
        key = (from_kind, to_kind)
        with self._lock:
            if key not in self._overrides:
                return False
            overrides = dict(self._overrides)
            del overrides[key]
            self._overrides = overrides
        return True

    # -- lookup -------------------------------------------------------------

    def resolve(self, from_kind: str, to_kind: str) -> Optional[ConversionRule]:
        """Return the winning rule for a pair, or ``None`` if nothing matches."""
        key = (from_kind, to_kind)
        for layer in (self._overrides, self._builtins, self._defaults):
            rule = layer.get(key)
            if rule is not None:
                return rule
        return None

    def resolve_name(self, name: str) -> Optional[ConversionRule]:
        """Return the winning rule whose ``<ToKind>From<FromKind>`` name is *name*."""
        for rule in self.rules():
            if rule.name == name:
                return rule
        return None

    def get(self, from_kind: str, to_kind: str) -> ConversionRule:
        """Like ``resolve`` but raise ``ValueError`` when no rule exists."""
        rule = self.resolve(from_kind, to_kind)
        if rule is None:
            raise ValueError(f"Unknown conversion '{rule_name(from_kind, to_kind)}'")
        return rule

    def __contains__(self, key: Any) -> bool:
        return isinstance(key, tuple) and len(key) == 2 and self.resolve(*key) is not None

    # -- introspection ------------------------------------------------------

    def rules(self) -> List[ConversionRule]:
        """Winning rule for every known pair, overrides first."""
        seen: Dict[RuleKey, ConversionRule] = {}
        for layer in (self._overrides, self._builtins, self._defaults):
            for key, rule in layer.items():
                seen.setdefault(key, rule)
        return list(seen.values())

    def overrides(self) -> List[ConversionRule]:
        return list(self._overrides.values())

    def __iter__(self) -> Iterator[ConversionRule]:
        return iter(self.rules())

    def __len__(self) -> int:
        return len(self.rules())
