"""Built-in conversion routines.

Every routine takes one value and returns the converted value, or ``None``
when the input is malformed for that routine.  None of them raise on bad
data and none of them touch global state.

Exports
-------
BUILTIN_RULES
    ``(from_kind, to_kind) → caster`` for the public catalog.

DEFAULT_RULES
    ``(from_kind, to_kind) → caster`` for the string/date fallbacks.  These
    are consulted only when neither an override nor a built-in rule exists,
    so a registered date rule always takes precedence.

make_date_encoder
    Build a ``date → json`` caster for a custom ``strftime`` format.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import SplitResult
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import regex

from . import kinds
from .mutable import MutableString
from .urls import URLValue

Caster = Callable[[Any], Any]

# JSON number grammar; no locale, no surrounding whitespace.
NUMBER_PATTERN = regex.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?$")
INTEGER_PATTERN = regex.compile(r"^-?(?:0|[1-9]\d*)$")

# RFC 3986 URI-reference alphabet, with every '%' starting a valid escape.
URL_PATTERN = regex.compile(
    r"^(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+$"
)

# Input form once colons are dropped: 2012-11-22T101510[.123]+0000 / Z
DATE_PATTERN = regex.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{6})(?P<fraction>\.\d{1,6})?(?P<offset>Z|[+-]\d{4})$"
)

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H%M%S%z"


# ─────────────────────────────────────────────────────────────────────────────
# Mutable copies
# ─────────────────────────────────────────────────────────────────────────────


def mutable_string_from_string(string: str) -> MutableString:
    return MutableString(str(string))


def json_object_from_string(string: Any) -> str:
    """Plain ``str`` for any string variant, ``MutableString`` included."""
    return str(string)


def mutable_array_from_array(array: Iterable[Any]) -> list[Any]:
    return list(array)


def mutable_dictionary_from_dictionary(dictionary: Mapping[Any, Any]) -> dict[Any, Any]:
    return dict(dictionary)


# ─────────────────────────────────────────────────────────────────────────────
# Sets
# ─────────────────────────────────────────────────────────────────────────────


def set_from_array(array: Iterable[Any]) -> frozenset[Any] | None:
    try:
        return frozenset(array)
    except TypeError:
        return None


def mutable_set_from_array(array: Iterable[Any]) -> set[Any] | None:
    try:
        return set(array)
    except TypeError:
        return None


def json_object_from_set(values: Iterable[Any]) -> list[Any]:
    """Elements in set iteration order; original order and duplicates are gone."""
    return list(values)


json_object_from_mutable_set = json_object_from_set


# ─────────────────────────────────────────────────────────────────────────────
# Booleans
# ─────────────────────────────────────────────────────────────────────────────


def bool_from_number(number: Any) -> bool:
    return number != 0


def bool_from_string(string: str) -> bool:
    """Only the literal ``"0"`` is false; ``"false"`` and ``""`` are true."""
    return str(string) != "0"


def json_object_from_bool(value: Any) -> Any:
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Numbers and decimals
# ─────────────────────────────────────────────────────────────────────────────


def number_from_string(string: str) -> int | float | None:
    text = str(string)
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    if INTEGER_PATTERN.fullmatch(text):
        try:
            return int(text)
        except ValueError:
            # over sys.get_int_max_str_digits()
            return None
    number = float(text)
    return number if math.isfinite(number) else None


def string_from_number(number: Any) -> str:
    if isinstance(number, bool):
        return "1" if number else "0"
    if isinstance(number, float):
        return repr(number)
    return str(number)


def decimal_from_string(string: str) -> Decimal | None:
    text = str(string)
    if not NUMBER_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def string_from_decimal(number: Decimal) -> str:
    return str(number)


# ─────────────────────────────────────────────────────────────────────────────
# URLs and time zones
# ─────────────────────────────────────────────────────────────────────────────


def url_from_string(string: str) -> URLValue | None:
    text = str(string)
    if not URL_PATTERN.fullmatch(text):
        return None
    try:
        url = URLValue(text)
        # raises on a malformed port
        url.port
    except ValueError:
        return None
    return url


def json_object_from_url(url: SplitResult) -> str:
    return url.geturl()


def time_zone_from_string(string: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(str(string))
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # OSError: the key names a directory of the zone database
        return None


def json_object_from_time_zone(zone: tzinfo) -> str | None:
    key = getattr(zone, "key", None)
    return key if key is not None else zone.tzname(None)


# ─────────────────────────────────────────────────────────────────────────────
# Dates
# ─────────────────────────────────────────────────────────────────────────────


def date_from_number(number: Any) -> datetime | None:
    try:
        return datetime.fromtimestamp(float(number), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def date_from_string(string: str) -> datetime | None:
    """Parse ``YYYY-MM-DDTHH:MM:SS[.ffffff]±HH:MM`` (or ``Z``).

    Colons are ignored, so ``+0000`` and ``+00:00`` are both accepted.  The
    offset is mandatory.
    """
    match = DATE_PATTERN.fullmatch(str(string).replace(":", ""))
    if match is None:
        return None
    offset = "+0000" if match["offset"] == "Z" else match["offset"]
    fraction = match["fraction"] or ".0"
    try:
        return datetime.strptime(
            f"{match['date']}T{match['time']}{fraction}{offset}",
            "%Y-%m-%dT%H%M%S.%f%z",
        )
    except ValueError:
        return None


def make_date_encoder(date_format: str = DEFAULT_DATE_FORMAT) -> Caster:
    """Return a ``date → json`` caster writing dates with *date_format*.

    Naive datetimes are taken to be UTC.
    """

    def json_object_from_date(date: datetime) -> str:
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return date.strftime(date_format)

    return json_object_from_date


json_object_from_date = make_date_encoder()


# ─────────────────────────────────────────────────────────────────────────────
# Rule tables
# ─────────────────────────────────────────────────────────────────────────────

BUILTIN_RULES: Mapping[tuple[str, str], Caster] = {
    (kinds.STRING, kinds.MUTABLE_STRING): mutable_string_from_string,
    (kinds.STRING, kinds.JSON_OBJECT): json_object_from_string,
    (kinds.ARRAY, kinds.MUTABLE_ARRAY): mutable_array_from_array,
    (kinds.DICTIONARY, kinds.MUTABLE_DICTIONARY): mutable_dictionary_from_dictionary,
    (kinds.ARRAY, kinds.SET): set_from_array,
    (kinds.ARRAY, kinds.MUTABLE_SET): mutable_set_from_array,
    (kinds.SET, kinds.JSON_OBJECT): json_object_from_set,
    (kinds.MUTABLE_SET, kinds.JSON_OBJECT): json_object_from_mutable_set,
    (kinds.NUMBER, kinds.BOOL): bool_from_number,
    (kinds.STRING, kinds.BOOL): bool_from_string,
    (kinds.BOOL, kinds.JSON_OBJECT): json_object_from_bool,
    (kinds.STRING, kinds.NUMBER): number_from_string,
    (kinds.NUMBER, kinds.STRING): string_from_number,
    (kinds.STRING, kinds.DECIMAL): decimal_from_string,
    (kinds.DECIMAL, kinds.STRING): string_from_decimal,
    (kinds.STRING, kinds.URL): url_from_string,
    (kinds.URL, kinds.JSON_OBJECT): json_object_from_url,
    (kinds.STRING, kinds.TIME_ZONE): time_zone_from_string,
    (kinds.TIME_ZONE, kinds.JSON_OBJECT): json_object_from_time_zone,
    (kinds.NUMBER, kinds.DATE): date_from_number,
}

DEFAULT_RULES: Mapping[tuple[str, str], Caster] = {
    (kinds.STRING, kinds.DATE): date_from_string,
    (kinds.DATE, kinds.JSON_OBJECT): json_object_from_date,
}
