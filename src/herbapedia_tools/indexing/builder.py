"""Aggregate plant and profile documents into presentation indexes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from herbapedia_tools.core.config import Settings, get_settings
from herbapedia_tools.core.constants import INDEX_VERSION, SYSTEMS
from herbapedia_tools.core.exceptions import DocumentParseError
from herbapedia_tools.core.json_utils import dump_json, load_document
from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import DocumentRole, PROFILE_ROLES
from herbapedia_tools.core.uris import classify_reference, local_id, reference_id, slug_from_id
from herbapedia_tools.corpus.documents import PlantDocument, ProfileDocument
from herbapedia_tools.corpus.walker import find_documents

from .categories import CATEGORIES, CATEGORY_SLUGS, classify
from .schema import validate_artifact

LOGGER = get_logger(__name__)

TCM_SUMMARY_FIELDS = ("pinyin", "chineseName", "hasNature", "hasFlavor", "entersMeridian")


@dataclass(slots=True)
class IndexBuildResult:
    generated: str
    plants: list[dict[str, Any]] = field(default_factory=list)
    profiles: list[dict[str, Any]] = field(default_factory=list)
    herbs: list[dict[str, Any]] = field(default_factory=list)
    orphans: list[dict[str, Any]] = field(default_factory=list)
    unresolved: list[dict[str, Any]] = field(default_factory=list)
    malformed: list[dict[str, Any]] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    parse_failures: list[str] = field(default_factory=list)

    @property
    def category_counts(self) -> dict[str, int]:
        counts = {slug: 0 for slug in CATEGORY_SLUGS}
        for entry in self.herbs:
            counts[entry["category"]] = counts.get(entry["category"], 0) + 1
        return counts

    @property
    def profile_counts(self) -> dict[str, int]:
        counts = {system: 0 for system in SYSTEMS}
        for entry in self.profiles:
            counts[entry["system"]] = counts.get(entry["system"], 0) + 1
        return counts

    def index_document(self) -> dict[str, Any]:
        counts = self.category_counts
        return {
            "version": INDEX_VERSION,
            "generated": self.generated,
            "counts": {
                "plants": len(self.plants),
                "profiles": self.profile_counts,
                "herbs": sum(1 for entry in self.herbs if entry["type"] == "herb"),
                "total": len(self.herbs),
                "orphans": len(self.orphans),
                "categories": counts,
            },
            "categories": [{"slug": slug, "count": count} for slug, count in counts.items()],
            "herbs": self.herbs,
            "orphans": self.orphans,
        }

    def plants_document(self) -> dict[str, Any]:
        return {"version": INDEX_VERSION, "generated": self.generated, "plants": self.plants}

    def profiles_document(self) -> dict[str, Any]:
        return {"version": INDEX_VERSION, "generated": self.generated, "profiles": self.profiles}

    def categories_document(self) -> dict[str, Any]:
        counts = self.category_counts
        return {
            "version": INDEX_VERSION,
            "generated": self.generated,
            "categories": [item.as_dict(counts.get(item.slug, 0)) for item in CATEGORIES],
        }

    def artifacts(self) -> dict[str, dict[str, Any]]:
        return {
            "index.json": self.index_document(),
            "plants.json": self.plants_document(),
            "profiles.json": self.profiles_document(),
            "categories.json": self.categories_document(),
        }

    def reference_report(self) -> dict[str, Any]:
        return {"unresolved": self.unresolved, "malformed": self.malformed}


def _text_or_none(plant: PlantDocument, key: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    LOGGER.warning("index.field_not_text", slug=plant.slug, field=key, value_type=type(value).__name__)
    return None


def plant_summary(plant: PlantDocument) -> dict[str, Any]:
    """Summarise a plant; text fields holding anything but a string become ``None``."""
    return {
        "slug": plant.slug,
        "type": "plant",
        "name": plant.name,
        "commonName": plant.common_name,
        "scientificName": _text_or_none(plant, "scientificName", plant.scientific_name),
        "family": _text_or_none(plant, "family", plant.family),
        "image": _text_or_none(plant, "image", plant.image),
    }


def profile_summary(profile: ProfileDocument) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "slug": profile.slug,
        "system": profile.system,
        "plantSlug": profile.plant_slug,
        "name": profile.name,
    }
    summary.update(profile.classification)
    return summary


class IndexBuilder:
    """Build the merged index from typed plant and profile records."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def collect(self, root: Path) -> tuple[list[PlantDocument], list[ProfileDocument], list[str]]:
        suffixes = tuple(self._settings.document_suffixes)
        plants: list[PlantDocument] = []
        profiles: list[ProfileDocument] = []
        failures: list[str] = []
        for entry in find_documents(root, {DocumentRole.PLANT, *PROFILE_ROLES}, suffixes=suffixes):
            try:
                payload = load_document(entry.path)
            except DocumentParseError as exc:
                LOGGER.warning("index.parse_failed", path=str(entry.path), reason=exc.reason)
                failures.append(str(entry.path))
                continue
            if entry.role is DocumentRole.PLANT:
                plants.append(PlantDocument.from_payload(payload, entry.slug))
            else:
                profiles.append(ProfileDocument.from_payload(payload, entry.slug, entry.role.system or ""))
        return plants, profiles, failures

    def build(self, root: Path | None = None, *, generated: str | None = None) -> IndexBuildResult:
        root = Path(root or self._settings.data_root)
        plants, profiles, failures = self.collect(root)
        result = self.build_from_records(plants, profiles, generated=generated)
        result.parse_failures = failures
        return result

    def build_from_records(
        self,
        plants: Iterable[PlantDocument],
        profiles: Iterable[ProfileDocument],
        *,
        generated: str | None = None,
    ) -> IndexBuildResult:
        result = IndexBuildResult(generated=generated or _now())
        unique_plants = _dedupe(plants, result.duplicates)
        unique_profiles = _dedupe(profiles, result.duplicates)

        plant_by_slug: dict[str, PlantDocument] = {}
        for plant in unique_plants:
            plant_by_slug.setdefault(plant.slug, plant)
            id_slug = slug_from_id(plant.id) if plant.id else None
            if id_slug:
                plant_by_slug.setdefault(id_slug, plant)
            result.plants.append(plant_summary(plant))

        attached: dict[str, list[ProfileDocument]] = {}
        for profile in unique_profiles:
            result.profiles.append(profile_summary(profile))
            reference = profile.to_payload().get("derivedFromPlant")
            if classify_reference(reference) == "unknown" or profile.plant_slug is None:
                self._record_orphan(result, profile, reference, "malformed")
                continue
            plant = plant_by_slug.get(profile.plant_slug)
            if plant is None:
                self._record_orphan(result, profile, reference, "unresolved")
                continue
            attached.setdefault(plant.slug, []).append(profile)

        for plant, summary in zip(unique_plants, result.plants):
            result.herbs.append(self._merged_entry(plant, summary, attached.get(plant.slug, [])))

        LOGGER.info(
            "index.built",
            plants=len(result.plants),
            profiles=len(result.profiles),
            entries=len(result.herbs),
            orphans=len(result.orphans),
            duplicates=len(result.duplicates),
        )
        return result

    def write(self, result: IndexBuildResult, output_dir: Path | None = None) -> list[Path]:
        """Validate every artifact, then write them; nothing is written if one is invalid."""
        target = Path(output_dir or self._settings.output_dir)
        artifacts = result.artifacts()
        for name, payload in artifacts.items():
            validate_artifact(name, payload)
        written: list[Path] = []
        for name, payload in artifacts.items():
            path = target / name
            dump_json(payload, path)
            written.append(path)
        LOGGER.info("index.written", output_dir=str(target), files=[path.name for path in written])
        return written

    @staticmethod
    def _record_orphan(result: IndexBuildResult, profile: ProfileDocument, reference: Any, reason: str) -> None:
        entry = {
            "slug": profile.slug,
            "system": profile.system,
            "derivedFromPlant": reference_id(reference),
            "reason": reason,
        }
        result.orphans.append(entry)
        (result.malformed if reason == "malformed" else result.unresolved).append(entry)
        LOGGER.warning("index.orphan_profile", **entry)

    @staticmethod
    def _merged_entry(plant: PlantDocument, summary: dict[str, Any], profiles: list[ProfileDocument]) -> dict[str, Any]:
        entry = dict(summary)
        by_system: dict[str, str] = {}
        ordered = sorted(profiles, key=lambda item: (SYSTEMS.index(item.system) if item.system in SYSTEMS else 99, item.slug))
        for profile in ordered:
            if profile.system in by_system:
                LOGGER.info("index.extra_profile", plant=plant.slug, system=profile.system, profile=profile.slug)
                continue
            by_system[profile.system] = profile.slug
        tcm = next((item for item in ordered if item.system == "tcm"), None)
        entry["type"] = "herb" if by_system else "plant"
        entry["profiles"] = by_system
        if tcm is not None:
            entry["tcmSlug"] = tcm.slug
            for key in TCM_SUMMARY_FIELDS:
                entry[key] = tcm.classification.get(key)
            if not entry["name"]:
                entry["name"] = tcm.name
        entry["category"] = classify(
            plant.slug,
            plant_category=plant.category,
            tcm_category=tcm.classification.get("hasCategory") if tcm is not None else None,
            systems=list(by_system),
        )
        return entry


def _dedupe(records: Iterable[Any], duplicates: list[str]) -> list[Any]:
    seen: set[str] = set()
    unique: list[Any] = []
    for record in records:
        key = local_id(record.id) if record.id else f"{getattr(record, 'system', 'plant')}:{record.slug}"
        if key in seen:
            duplicates.append(key)
            LOGGER.info("index.duplicate_skipped", id=key)
            continue
        seen.add(key)
        unique.append(record)
    return unique


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
