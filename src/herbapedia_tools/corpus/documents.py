"""Typed per-role records over the loosely shaped JSON-LD payloads.

Each record lifts the keys it understands into attributes and keeps every other
key in ``extra`` so ``to_payload()`` reproduces the document without loss.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from herbapedia_tools.core.models import DocumentRole
from herbapedia_tools.core.uris import iter_references, reference_id, slug_from_id

LanguageMap = dict[str, str]

TCM_CLASSIFICATION_FIELDS: tuple[str, ...] = (
    "pinyin",
    "chineseName",
    "hasCategory",
    "hasNature",
    "hasFlavor",
    "entersMeridian",
)
AYURVEDA_CLASSIFICATION_FIELDS: tuple[str, ...] = (
    "sanskritName",
    "hasRasa",
    "hasVirya",
    "hasVipaka",
    "hasGuna",
    "affectsDosha",
)
WESTERN_CLASSIFICATION_FIELDS: tuple[str, ...] = ("hasAction", "hasCategory")

CLASSIFICATION_FIELDS: dict[str, tuple[str, ...]] = {
    "tcm": TCM_CLASSIFICATION_FIELDS,
    "ayurveda": AYURVEDA_CLASSIFICATION_FIELDS,
    "western": WESTERN_CLASSIFICATION_FIELDS,
}


def _split(payload: dict[str, Any], known: tuple[str, ...]) -> tuple[dict[str, Any], dict[str, Any]]:
    lifted = {key: payload[key] for key in known if key in payload}
    extra = {key: value for key, value in payload.items() if key not in known}
    return lifted, extra


def _types(value: Any) -> list[str]:
    return [item for item in iter_references(value) if isinstance(item, str)]


@dataclass(slots=True)
class PlantDocument:
    KEYS: ClassVar[tuple[str, ...]] = (
        "@id",
        "@type",
        "scientificName",
        "name",
        "commonName",
        "description",
        "family",
        "genus",
        "species",
        "image",
        "sameAs",
        "containsChemical",
        "gbifId",
        "category",
    )

    slug: str
    id: str | None
    types: list[str]
    scientific_name: str | None
    name: LanguageMap
    common_name: LanguageMap
    description: LanguageMap
    family: str | None = None
    genus: str | None = None
    species: str | None = None
    image: str | None = None
    same_as: list[Any] = field(default_factory=list)
    contains_chemical: list[Any] = field(default_factory=list)
    gbif_id: Any = None
    category: Any = None
    extra: dict[str, Any] = field(default_factory=dict)
    _raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], slug: str) -> "PlantDocument":
        lifted, extra = _split(payload, cls.KEYS)
        return cls(
            slug=slug,
            id=lifted.get("@id"),
            types=_types(lifted.get("@type")),
            scientific_name=lifted.get("scientificName"),
            name=_as_map(lifted.get("name")),
            common_name=_as_map(lifted.get("commonName")),
            description=_as_map(lifted.get("description")),
            family=lifted.get("family"),
            genus=lifted.get("genus"),
            species=lifted.get("species"),
            image=lifted.get("image"),
            same_as=iter_references(lifted.get("sameAs")),
            contains_chemical=iter_references(lifted.get("containsChemical")),
            gbif_id=lifted.get("gbifId"),
            category=lifted.get("category"),
            extra=extra,
            _raw=lifted,
        )

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self._raw)
        payload.update(self.extra)
        return payload


@dataclass(slots=True)
class ProfileDocument:
    BASE_KEYS: ClassVar[tuple[str, ...]] = ("@id", "@type", "derivedFromPlant", "name", "sameAs")

    slug: str
    system: str
    id: str | None
    types: list[str]
    derived_from_plant: str | None
    name: LanguageMap
    same_as: list[Any] = field(default_factory=list)
    classification: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    _raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], slug: str, system: str) -> "ProfileDocument":
        known = cls.BASE_KEYS + CLASSIFICATION_FIELDS.get(system, ())
        lifted, extra = _split(payload, known)
        classification = {key: lifted[key] for key in CLASSIFICATION_FIELDS.get(system, ()) if key in lifted}
        return cls(
            slug=slug,
            system=system,
            id=lifted.get("@id"),
            types=_types(lifted.get("@type")),
            derived_from_plant=reference_id(lifted.get("derivedFromPlant")),
            name=_as_map(lifted.get("name")),
            same_as=iter_references(lifted.get("sameAs")),
            classification=classification,
            extra=extra,
            _raw=lifted,
        )

    @property
    def plant_slug(self) -> str | None:
        return slug_from_id(self.derived_from_plant)

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self._raw)
        payload.update(self.extra)
        return payload


@dataclass(slots=True)
class ReferenceDataset:
    slug: str
    id: str | None
    concepts: list[dict[str, Any]]
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any], slug: str) -> "ReferenceDataset":
        graph = payload.get("@graph")
        concepts = [item for item in graph if isinstance(item, dict)] if isinstance(graph, list) else []
        extra = {key: value for key, value in payload.items() if key not in ("@id", "@graph")}
        return cls(slug=slug, id=payload.get("@id"), concepts=concepts, extra=extra)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.id is not None:
            payload["@id"] = self.id
        payload.update(self.extra)
        payload["@graph"] = self.concepts
        return payload


CorpusDocument = Union[PlantDocument, ProfileDocument, ReferenceDataset]


def parse_record(role: DocumentRole, payload: dict[str, Any], slug: str) -> CorpusDocument:
    """Lift a raw payload into the record type for ``role``."""
    if role is DocumentRole.PLANT:
        return PlantDocument.from_payload(payload, slug)
    if role.is_profile:
        return ProfileDocument.from_payload(payload, slug, role.system or "")
    return ReferenceDataset.from_payload(payload, slug)


def _as_map(value: Any) -> LanguageMap:
    if isinstance(value, dict):
        return {key: text for key, text in value.items() if isinstance(text, str)}
    if isinstance(value, str) and value.strip():
        return {"en": value}
    return {}
