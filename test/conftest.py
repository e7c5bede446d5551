from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from herbapedia_tools.core.config import Settings


def trilingual(en: str, hant: str, hans: str | None = None) -> dict[str, str]:
    return {"en": en, "zh-Hant": hant, "zh-Hans": hans or hant}


def plant_payload(slug: str, scientific_name: str | None = "Panax ginseng", **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "@context": "../../../context/plant.jsonld",
        "@id": f"plant/{slug}",
        "@type": ["botany:PlantSpecies", "schema:Thing"],
        "name": trilingual(slug.title(), "人參", "人参"),
        "description": trilingual(f"{slug} description", "描述"),
    }
    if scientific_name is not None:
        payload["scientificName"] = scientific_name
    payload.update(extra)
    return payload


def tcm_payload(slug: str, plant_slug: str | None = None, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "@id": f"tcm/herbs/{slug}",
        "@type": ["tcm:Herb"],
        "derivedFromPlant": {"@id": f"plant/{plant_slug or slug}"},
        "name": trilingual(slug.title(), "人參", "人参"),
        "pinyin": "Ren Shen",
        "hasCategory": {"@id": "category/tonify-qi"},
        "hasNature": {"@id": "nature/warm"},
        "hasFlavor": [{"@id": "flavor/sweet"}],
        "entersMeridian": [{"@id": "meridian/lung"}],
    }
    payload.update(extra)
    return payload


def western_payload(slug: str, plant_slug: str | None = None, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "@id": f"western/herbs/{slug}",
        "@type": ["western:Herb"],
        "derivedFromPlant": {"@id": f"plant/{plant_slug or slug}"},
        "name": trilingual(slug.title(), "西草"),
    }
    payload.update(extra)
    return payload


class CorpusBuilder:
    """Writes documents into a temporary corpus laid out like the real one."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, relative: str, payload: Any) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
        path.write_text(text, encoding="utf-8")
        return path

    def plant(self, slug: str, payload: Any = None, **fields: Any) -> Path:
        return self.write(f"entities/plants/{slug}/entity.jsonld", payload or plant_payload(slug, **fields))

    def tcm(self, slug: str, payload: Any = None, **fields: Any) -> Path:
        return self.write(f"systems/tcm/herbs/{slug}/profile.jsonld", payload or tcm_payload(slug, **fields))

    def western(self, slug: str, payload: Any = None, **fields: Any) -> Path:
        return self.write(f"systems/western/herbs/{slug}/profile.jsonld", payload or western_payload(slug, **fields))

    def reference(self, name: str, concepts: list[dict[str, Any]]) -> Path:
        return self.write(f"systems/tcm/reference/{name}.jsonld", {"@id": f"tcm/{name}", "@graph": concepts})

    def read(self, path: Path) -> dict[str, Any]:
        return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def corpus(tmp_path: Path) -> CorpusBuilder:
    root = tmp_path / "data"
    root.mkdir()
    return CorpusBuilder(root)


@pytest.fixture
def settings(corpus: CorpusBuilder, tmp_path: Path) -> Settings:
    return Settings(data_root=corpus.root, output_dir=tmp_path / "dist", rate_limit_delay=0.001, max_retries=1)
