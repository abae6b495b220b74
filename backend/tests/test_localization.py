# backend/tests/test_localization.py
import pytest

from portfolio_api.localization import localize, parse_string_list, resolve_localized


@pytest.mark.parametrize("preferred,fallback,expected", [
    ("مرحبا", "Hello", "مرحبا"),
    ("", "Hello", "Hello"),
    ("   ", "Hello", "Hello"),
    (None, "Hello", "Hello"),
    (None, None, ""),
])
def test_resolve_localized(preferred, fallback, expected):
    assert resolve_localized(preferred, fallback) == expected


@pytest.mark.parametrize("value,expected", [
    (["a", "b"], ["a", "b"]),
    ('["a", "b"]', ["a", "b"]),
    ("[not json", []),
    ('{"a": 1}', []),
    ("", []),
    (None, []),
    (["a", 3, None], ["a"]),
])
def test_parse_string_list(value, expected):
    assert parse_string_list(value) == expected


def test_localize_prefers_requested_language():
    record = {
        "title_en": "CNC Engineer",
        "title_ar": "مهندس CNC",
        "bio_en": "Bio",
        "bio_ar": None,
        "items_en": ["one"],
        "items_ar": [],
        "email": "x@example.com",
        "orphan_en": "no pair",
    }

    assert localize(record, "ar") == {"title": "مهندس CNC", "bio": "Bio", "items": ["one"]}
    assert localize(record, "en") == {"title": "CNC Engineer", "bio": "Bio", "items": ["one"]}


def test_localize_rejects_unknown_language():
    with pytest.raises(ValueError):
        localize({}, "fr")
