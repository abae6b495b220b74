# backend/portfolio_api/localization.py
"""Bilingual display helpers used when shaping public responses.

Content is stored as parallel ``<field>_en`` / ``<field>_ar`` columns. The
helpers here pick the visitor's language and fall back to the other one when
the preferred text is empty. They are never used for storage or validation.
"""
import json
from typing import Any, Dict, List, Optional

SUPPORTED_LANGUAGES = ("en", "ar")


def resolve_localized(preferred: Optional[str], fallback: Optional[str]) -> str:
    if isinstance(preferred, str) and preferred.strip():
        return preferred
    return fallback or ""


def parse_string_list(value: Any) -> List[str]:
    """Coerce a stored list value into a list of strings.

    Accepts a native list or legacy JSON-encoded text. Malformed JSON, or JSON
    that is not a list, yields an empty list instead of raising.
    """
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


def localize(record: Dict[str, Any], lang: str) -> Dict[str, Any]:
    """Resolve every ``_en``/``_ar`` pair in ``record`` for ``lang``.

    Returns a mapping of base field name -> resolved value. List pairs resolve
    to the preferred list unless it is empty.
    """
    if lang not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {lang}")
    other = "en" if lang == "ar" else "ar"
    resolved: Dict[str, Any] = {}
    for key in record:
        if not key.endswith("_en"):
            continue
        base = key[:-3]
        if f"{base}_ar" not in record:
            continue
        preferred = record.get(f"{base}_{lang}")
        fallback = record.get(f"{base}_{other}")
        if isinstance(preferred, list) or isinstance(fallback, list):
            preferred_list = parse_string_list(preferred)
            resolved[base] = preferred_list or parse_string_list(fallback)
        else:
            resolved[base] = resolve_localized(preferred, fallback)
    return resolved
