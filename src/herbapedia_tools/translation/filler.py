"""Back-fill missing languages in multilingual fields."""

from __future__ import annotations

import copy
import re
from dataclasses import asdict, dataclass
from typing import Any, Literal

from herbapedia_tools.core.constants import SYSTEMS
from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import DocumentRole
from herbapedia_tools.core.uris import reference_id
from herbapedia_tools.corpus.language import has_text, preferred_text
from herbapedia_tools.validation.rules import multilingual_fields

from .charmap import to_simplified
from .glossary import lookup_term

LOGGER = get_logger(__name__)

PLACEHOLDER_MARKER = "[[needs-translation]]"

FillAction = Literal["derived", "copied", "placeholder", "glossary"]

# Identity fields are authored by hand; synthesising them would hide real gaps.
_SKIPPED_FIELDS = frozenset({"name"})


@dataclass(slots=True, frozen=True)
class FillChange:
    field: str
    language: str
    action: FillAction
    value: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def is_placeholder(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(PLACEHOLDER_MARKER)


def field_words(field: str) -> str:
    """``tcmTraditionalUsage`` -> ``Traditional Usage``; ``dosage`` -> ``Dosage``."""
    name = field.rsplit(".", 1)[-1]
    for system in SYSTEMS:
        if name.startswith(system) and name[len(system):][:1].isupper():
            name = name[len(system):]
            break
    words = re.sub(r"([A-Z])", r" \1", name).strip()
    return words[:1].upper() + words[1:]


def chinese_placeholder(subject: str, field: str) -> str:
    return f"{PLACEHOLDER_MARKER}【{subject}】{field_words(field)}內容待翻譯補充。"


def english_placeholder(subject: str, field: str) -> str:
    return f"{PLACEHOLDER_MARKER} [{field_words(field)} information for {subject} - translation needed]"


def _writable(language_map: dict[str, Any], language: str, field: str) -> bool:
    """True when ``language`` is absent or blank; other non-string values are left alone."""
    value = language_map.get(language)
    if value is None or (isinstance(value, str) and not value.strip()):
        return True
    if not isinstance(value, str):
        LOGGER.warning("translation.value_not_text", field=field, language=language, value_type=type(value).__name__)
    return False


def fill_language_map(
    language_map: dict[str, Any],
    field: str,
    *,
    subject_zh: str,
    subject_en: str,
) -> list[FillChange]:
    """Fill ``language_map`` in place and return what was added."""
    changes: list[FillChange] = []

    def put(language: str, action: FillAction, value: str) -> None:
        if not _writable(language_map, language, field):
            return
        language_map[language] = value
        changes.append(FillChange(field=field, language=language, action=action, value=value))

    if has_text(language_map, "zh-Hant") and not has_text(language_map, "zh-Hans"):
        put("zh-Hans", "derived", to_simplified(language_map["zh-Hant"]))
    if has_text(language_map, "zh-Hans") and not has_text(language_map, "zh-Hant"):
        put("zh-Hant", "copied", language_map["zh-Hans"])
    if has_text(language_map, "en") and not has_text(language_map, "zh-Hant"):
        placeholder = chinese_placeholder(subject_zh, field)
        put("zh-Hant", "placeholder", placeholder)
        put("zh-Hans", "placeholder", to_simplified(placeholder))
    if not has_text(language_map, "en") and (has_text(language_map, "zh-Hant") or has_text(language_map, "zh-Hans")):
        put("en", "placeholder", english_placeholder(subject_en, field))
    return changes


def _subjects(label: Any, fallback: str) -> tuple[str, str]:
    zh = preferred_text(label, ("zh-Hant", "zh-Hans", "en"), fallback) or fallback
    en = preferred_text(label, ("en", "zh-Hant", "zh-Hans"), fallback) or fallback
    return zh, en


def _fill_fields(document: dict[str, Any], fields: tuple[str, ...], subject_zh: str, subject_en: str) -> list[FillChange]:
    changes: list[FillChange] = []
    for field in fields:
        if field in _SKIPPED_FIELDS:
            continue
        value = document.get(field)
        if not isinstance(value, dict) or not value:
            continue
        changes += fill_language_map(value, field, subject_zh=subject_zh, subject_en=subject_en)
    return changes


def _fill_common_name(document: dict[str, Any]) -> list[FillChange]:
    common = document.get("commonName")
    name = document.get("name")
    if not isinstance(common, dict) or not isinstance(name, dict):
        return []
    changes: list[FillChange] = []
    for language in ("zh-Hant", "zh-Hans"):
        if has_text(name, language) and _writable(common, language, "commonName"):
            common[language] = name[language]
            changes.append(FillChange(field="commonName", language=language, action="copied", value=name[language]))
    return changes


def _fill_concepts(document: dict[str, Any]) -> list[FillChange]:
    graph = document.get("@graph")
    if not isinstance(graph, list):
        return []
    changes: list[FillChange] = []
    for position, item in enumerate(graph):
        if not isinstance(item, dict):
            continue
        identifier = reference_id(item) or f"@graph[{position}]"
        label = item.get("prefLabel")
        term = lookup_term(label.get("en")) if isinstance(label, dict) else None
        if isinstance(label, dict) and term:
            for language in ("zh-Hant", "zh-Hans"):
                if _writable(label, language, f"{identifier}.prefLabel"):
                    label[language] = term[language]
                    changes.append(
                        FillChange(field=f"{identifier}.prefLabel", language=language, action="glossary", value=term[language])
                    )
        description = item.get("description")
        if isinstance(description, dict) and term and has_text(description, "en"):
            for language in ("zh-Hant", "zh-Hans"):
                value = term.get(f"description.{language}")
                if value and _writable(description, language, f"{identifier}.description"):
                    description[language] = value
                    changes.append(
                        FillChange(field=f"{identifier}.description", language=language, action="glossary", value=value)
                    )
        subject_zh, subject_en = _subjects(label, identifier)
        for field in ("prefLabel", "description"):
            value = item.get(field)
            if isinstance(value, dict) and value:
                changes += fill_language_map(
                    value, f"{identifier}.{field}", subject_zh=subject_zh, subject_en=subject_en
                )
    return changes


def fill_translations(
    document: dict[str, Any],
    role: DocumentRole,
    slug: str | None = None,
) -> tuple[dict[str, Any], list[FillChange]]:
    """Return a filled copy of ``document`` and the list of additions.

    Existing non-blank values are never changed, so running the filler on its
    own output yields no further changes.
    """
    updated = copy.deepcopy(document)
    if role is DocumentRole.REFERENCE_DATASET:
        changes = _fill_concepts(updated)
    else:
        subject_zh, subject_en = _subjects(updated.get("name"), slug or reference_id(updated) or "")
        changes = []
        if role is DocumentRole.PLANT:
            changes += _fill_common_name(updated)
        changes += _fill_fields(updated, multilingual_fields(role), subject_zh, subject_en)
    if changes:
        LOGGER.debug("translation.filled", slug=slug, role=role.value, changes=len(changes))
    return updated, changes
