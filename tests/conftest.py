"""pytest configuration and shared fixtures."""

import pytest

from json_value_transformer import build_default_transformer


@pytest.fixture
def transformer():
    """Transformer with the standard catalog."""
    return build_default_transformer()


@pytest.fixture
def sample_json():
    """A decoded JSON payload covering every JSON-native type."""
    return {
        "name": "Alice",
        "age": "30",
        "active": 1,
        "flag": "0",
        "tags": ["a", "b", "a"],
        "homepage": "https://example.com/a?b=1",
        "zone": "Europe/Paris",
        "created": 1700000000,
        "updated": "2012-11-22T10:15:10Z",
        "balance": "123456789012345.6789",
        "meta": {"k": "v"},
        "nothing": None,
    }
