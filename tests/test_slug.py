"""Unit tests for slug derivation (app.core.slug)."""

import pytest

from app.core.slug import slugify


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, expected",
    [
        ("P", "p"),
        ("My Site!", "my-site"),
        ("  Hello   World  ", "hello-world"),
        ("already-slugged", "already-slugged"),
        ("Café & Bar", "caf-bar"),
        ("---", "project"),
        ("日本", "project"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected
