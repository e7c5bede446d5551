"""JSON Schemas for the generated index artifacts."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator

from herbapedia_tools.core.exceptions import IndexBuildError

from .categories import CATEGORY_SLUGS

_LANGUAGE_MAP = {"type": "object", "additionalProperties": {"type": "string"}}
_NULLABLE_STRING = {"type": ["string", "null"]}

_HEADER = {
    "version": {"type": "string"},
    "generated": {"type": "string", "minLength": 1},
}

HERB_ENTRY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["slug", "type", "category", "name", "profiles"],
    "properties": {
        "slug": {"type": "string", "minLength": 1},
        "type": {"enum": ["herb", "plant"]},
        "category": {"enum": list(CATEGORY_SLUGS)},
        "name": _LANGUAGE_MAP,
        "commonName": _LANGUAGE_MAP,
        "scientificName": _NULLABLE_STRING,
        "family": _NULLABLE_STRING,
        "image": _NULLABLE_STRING,
        "profiles": {"type": "object", "additionalProperties": {"type": "string"}},
    },
}

INDEX_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "generated", "counts", "categories", "herbs", "orphans"],
    "properties": {
        **_HEADER,
        "counts": {
            "type": "object",
            "required": ["plants", "profiles", "total", "categories"],
            "properties": {
                "plants": {"type": "integer", "minimum": 0},
                "profiles": {"type": "object", "additionalProperties": {"type": "integer", "minimum": 0}},
                "total": {"type": "integer", "minimum": 0},
                "orphans": {"type": "integer", "minimum": 0},
                "categories": {"type": "object", "additionalProperties": {"type": "integer", "minimum": 0}},
            },
        },
        "categories": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["slug", "count"],
                "properties": {"slug": {"enum": list(CATEGORY_SLUGS)}, "count": {"type": "integer", "minimum": 0}},
            },
        },
        "herbs": {"type": "array", "items": HERB_ENTRY_SCHEMA},
        "orphans": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["slug", "system", "reason"],
                "properties": {"reason": {"enum": ["unresolved", "malformed"]}},
            },
        },
    },
}

PLANTS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "generated", "plants"],
    "properties": {
        **_HEADER,
        "plants": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["slug", "type", "name"],
                "properties": {"slug": {"type": "string", "minLength": 1}, "type": {"const": "plant"}},
            },
        },
    },
}

PROFILES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "generated", "profiles"],
    "properties": {
        **_HEADER,
        "profiles": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["slug", "system", "plantSlug", "name"],
                "properties": {
                    "slug": {"type": "string", "minLength": 1},
                    "system": {"enum": ["tcm", "ayurveda", "western"]},
                    "plantSlug": _NULLABLE_STRING,
                },
            },
        },
    },
}

CATEGORIES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["version", "generated", "categories"],
    "properties": {
        **_HEADER,
        "categories": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["slug", "title", "description", "count"],
                "properties": {
                    "slug": {"enum": list(CATEGORY_SLUGS)},
                    "title": _LANGUAGE_MAP,
                    "description": _LANGUAGE_MAP,
                    "count": {"type": "integer", "minimum": 0},
                },
            },
        },
    },
}

ARTIFACT_SCHEMAS: dict[str, dict[str, Any]] = {
    "index.json": INDEX_SCHEMA,
    "plants.json": PLANTS_SCHEMA,
    "profiles.json": PROFILES_SCHEMA,
    "categories.json": CATEGORIES_SCHEMA,
}


def artifact_errors(name: str, payload: Any) -> list[str]:
    validator = Draft7Validator(ARTIFACT_SCHEMAS[name])
    messages = []
    for error in sorted(validator.iter_errors(payload), key=lambda item: [str(part) for part in item.path]):
        location = "/".join(str(part) for part in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


def validate_artifact(name: str, payload: Any) -> None:
    """Raise :class:`IndexBuildError` when ``payload`` does not satisfy the schema for ``name``."""
    errors = artifact_errors(name, payload)
    if errors:
        raise IndexBuildError(f"{name} failed schema validation: " + "; ".join(errors[:5]))
