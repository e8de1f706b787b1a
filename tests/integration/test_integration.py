"""End-to-end tests: decode a JSON document into typed fields and back."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from json_value_transformer import build_default_transformer, kind_for_property

# Property declarations a mapping engine would read off a model class.
MODEL_FIELDS = {
    "name": str,
    "age": int,
    "active": bool,
    "flag": bool,
    "tags": frozenset,
    "homepage": "SplitResult",
    "zone": ZoneInfo,
    "created": datetime,
    "updated": datetime,
    "balance": Decimal,
    "meta": dict,
    "nothing": int,
}


def decode_model(transformer, payload):
    return {
        key: transformer.decode(payload[key], kind_for_property(declared))
        for key, declared in MODEL_FIELDS.items()
    }


class TestRoundTrip:
    """Decode a document, then encode every field back to JSON."""

    def test_decode_document(self, transformer, sample_json):
        model = decode_model(transformer, sample_json)

        assert model["name"] == "Alice"
        assert model["age"] == 30
        assert model["active"] is True
        assert model["flag"] is False
        assert model["tags"] == frozenset({"a", "b"})
        assert model["homepage"].hostname == "example.com"
        assert model["zone"] == ZoneInfo("Europe/Paris")
        assert model["created"] == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert model["updated"] == datetime(2012, 11, 22, 10, 15, 10, tzinfo=timezone.utc)
        assert model["balance"] == Decimal("123456789012345.6789")
        assert model["meta"] == {"k": "v"}
        assert model["meta"] is not sample_json["meta"]
        assert model["nothing"] is None

    def test_encode_document(self, transformer, sample_json):
        model = decode_model(transformer, sample_json)

        encoded = {key: transformer.encode(value) for key, value in model.items()}
        encoded["age"] = transformer.encode(model["age"], "string")
        encoded["balance"] = transformer.encode(model["balance"], "string")
        encoded["tags"] = sorted(encoded["tags"])

        assert encoded == {
            "name": "Alice",
            "age": "30",
            "active": True,
            "flag": False,
            "tags": ["a", "b"],
            "homepage": "https://example.com/a?b=1",
            "zone": "Europe/Paris",
            "created": "2023-11-14T221320+0000",
            "updated": "2012-11-22T101510+0000",
            "balance": "123456789012345.6789",
            "meta": {"k": "v"},
            "nothing": None,
        }
        # Everything is JSON-serializable again.
        json.dumps(encoded)

    def test_number_string_scenario(self, transformer):
        """"1" → number 1 → "1"."""
        number = transformer.decode("1", "number")
        assert number == 1
        assert transformer.encode(number, "string") == "1"

    def test_bad_field_degrades_to_none(self, transformer, sample_json):
        payload = dict(sample_json, age="thirty", zone="Not/AZone", homepage="not a url")
        model = decode_model(transformer, payload)

        assert model["age"] is None
        assert model["zone"] is None
        assert model["homepage"] is None
        assert model["name"] == "Alice"


class TestExtension:
    """Custom rules plug into the same lookup as the built-ins."""

    def test_hex_color_rule(self):
        transformer = build_default_transformer()

        @transformer.register_conversion("string", "color")
        def color_from_string(value):
            value = value.lstrip("#")
            return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))

        @transformer.register_conversion("tuple-color", "json")
        def json_object_from_color(value):
            return "#" + "".join(f"{c:02x}" for c in value)

        color = transformer.decode("#ff8000", "color")
        assert color == (255, 128, 0)
        assert transformer.encode(color, from_kind="tuple-color") == "#ff8000"
        assert transformer.decode("#zz", "color") is None

    @pytest.mark.parametrize("text", ["22/11/2012", "2012-11-22"])
    def test_date_format_override(self, text):
        formats = {"22/11/2012": "%d/%m/%Y", "2012-11-22": "%Y-%m-%d"}
        transformer = build_default_transformer(rules={
            ("string", "date"): lambda v: datetime.strptime(v, formats[v]),
        })

        assert transformer.decode(text, "date") == datetime(2012, 11, 22)
