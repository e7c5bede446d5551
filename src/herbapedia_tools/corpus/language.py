"""Language-map helpers."""

from __future__ import annotations

import re
from typing import Any, Iterable

from herbapedia_tools.core.constants import REQUIRED_LANGUAGES

# en, hi, sa, zh-Hant, zh-Hans, en-US, zh-Hant-HK
LANGUAGE_TAG_RE = re.compile(r"^[a-z]{2,3}(-[A-Z][a-z]{3})?(-[A-Z]{2})?$")

FALLBACK_ORDER: tuple[str, ...] = ("en", "zh-Hant", "zh-Hans")


def is_language_tag(key: Any) -> bool:
    return isinstance(key, str) and bool(LANGUAGE_TAG_RE.match(key))


def is_language_map(value: Any) -> bool:
    return isinstance(value, dict) and bool(value) and all(is_language_tag(key) for key in value)


def has_text(language_map: Any, tag: str) -> bool:
    if not isinstance(language_map, dict):
        return False
    value = language_map.get(tag)
    return isinstance(value, str) and bool(value.strip())


def missing_languages(language_map: Any, required: Iterable[str] = REQUIRED_LANGUAGES) -> list[str]:
    """Tags from ``required`` that are absent or blank."""
    return [tag for tag in required if not has_text(language_map, tag)]


def invalid_tags(language_map: dict[str, Any]) -> list[str]:
    return [key for key in language_map if not is_language_tag(key)]


def preferred_text(language_map: Any, order: Iterable[str] = FALLBACK_ORDER, default: str | None = None) -> str | None:
    """First non-blank value following ``order``; bare strings are returned as-is."""
    if isinstance(language_map, str):
        return language_map.strip() or default
    if not isinstance(language_map, dict):
        return default
    for tag in order:
        if has_text(language_map, tag):
            return language_map[tag].strip()
    return default
