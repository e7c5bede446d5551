"""Per-role rule tables for structural validation."""

from __future__ import annotations

from typing import Any, Final

from herbapedia_tools.core.constants import CONTENT_TOPICS, SYSTEMS, scoped_field
from herbapedia_tools.core.models import DocumentRole

PLANT_REQUIRED: Final[tuple[str, ...]] = ("@id", "@type", "name", "scientificName")
PLANT_RECOMMENDED: Final[tuple[str, ...]] = ("description",)

PROFILE_REQUIRED: Final[dict[str, tuple[str, ...]]] = {
    "tcm": (
        "@id",
        "@type",
        "derivedFromPlant",
        "name",
        "pinyin",
        "hasCategory",
        "hasNature",
        "hasFlavor",
        "entersMeridian",
    ),
    "ayurveda": (
        "@id",
        "@type",
        "derivedFromPlant",
        "name",
        "hasRasa",
        "hasVirya",
        "hasVipaka",
        "hasGuna",
    ),
    "western": ("@id", "@type", "derivedFromPlant", "name"),
}

SHARED_PROFILE_TEXT: Final[tuple[str, ...]] = ("contraindications", "dosage")

PLANT_MULTILINGUAL: Final[tuple[str, ...]] = ("name", "commonName", "description")

# Fields whose absence in any required language blocks the document.
IDENTITY_CRITICAL: Final[frozenset[str]] = frozenset({"name", "prefLabel"})

PROFILE_REFERENCE_FIELDS: Final[dict[str, tuple[str, ...]]] = {
    "tcm": ("hasCategory", "hasNature", "hasFlavor", "entersMeridian"),
    "ayurveda": ("hasRasa", "hasVirya", "hasVipaka", "hasGuna", "affectsDosha"),
    "western": ("hasCategory",),
}
PLANT_REFERENCE_FIELDS: Final[tuple[str, ...]] = ("sameAs", "hasPart", "containsChemical")

# Alternate compact-IRI spellings accepted for a field.
FIELD_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "name": ("schema:name",),
    "scientificName": ("dwc:scientificName",),
    "sameAs": ("schema:sameAs",),
    "description": ("schema:description",),
    "hasPart": ("herbapedia:hasPart",),
    "containsChemical": ("herbapedia:containsChemical",),
}


def profile_multilingual_fields(system: str) -> tuple[str, ...]:
    return ("name",) + tuple(scoped_field(system, topic) for topic in CONTENT_TOPICS) + SHARED_PROFILE_TEXT


def multilingual_fields(role: DocumentRole) -> tuple[str, ...]:
    if role is DocumentRole.PLANT:
        return PLANT_MULTILINGUAL
    if role.is_profile and role.system:
        return profile_multilingual_fields(role.system)
    return ()


def field_candidates(field: str, system: str | None = None) -> tuple[str, ...]:
    names = (field,) + FIELD_ALIASES.get(field, ())
    if system and not field.startswith("@"):
        names += (f"{system}:{field}",)
    return names


def lookup(document: dict[str, Any], field: str, system: str | None = None) -> tuple[str | None, Any]:
    """Return ``(key, value)`` for the first spelling of ``field`` present in ``document``."""
    for key in field_candidates(field, system):
        if key in document:
            return key, document[key]
    return None, None


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple, set)):
        return len(value) == 0
    return False


def content_key_owner(key: str) -> tuple[str | None, str] | None:
    """Classify a content key.

    Returns ``(system, topic)`` for system-scoped keys (``tcmFunctions`` or
    ``tcm:functions``), ``(None, topic)`` for generic keys (``functions`` or
    ``herbapedia:functions``) and ``None`` for anything else.
    """
    prefix, _, local = key.partition(":")
    if local:
        if local not in CONTENT_TOPICS:
            return None
        if prefix == "herbapedia":
            return None, local
        if prefix in SYSTEMS:
            return prefix, local
        return None
    if key in CONTENT_TOPICS:
        return None, key
    for system in SYSTEMS:
        for topic in CONTENT_TOPICS:
            if key == scoped_field(system, topic):
                return system, topic
    return None
