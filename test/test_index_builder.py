from __future__ import annotations

import json

import pytest
from conftest import plant_payload, tcm_payload, western_payload

from herbapedia_tools.core.exceptions import IndexBuildError
from herbapedia_tools.corpus.documents import PlantDocument, ProfileDocument
from herbapedia_tools.indexing import IndexBuilder, artifact_errors, classify, validate_artifact

GENERATED = "2026-01-01T00:00:00.000Z"

PLANT_SLUGS = [
    "ginseng",
    "ginger",
    "licorice-root",
    "goji",
    "chamomile",
    "dandelion",
    "nettle",
    "vitamin-c",
    "zinc",
    "lecithin",
]


def _plants() -> list[PlantDocument]:
    return [PlantDocument.from_payload(plant_payload(slug), slug) for slug in PLANT_SLUGS]


def _profiles() -> list[ProfileDocument]:
    tcm = [("ren-shen", "ginseng"), ("sheng-jiang", "ginger"), ("gan-cao", "licorice-root"), ("gou-qi-zi", "goji")]
    profiles = [ProfileDocument.from_payload(tcm_payload(slug, plant), slug, "tcm") for slug, plant in tcm]
    profiles.append(ProfileDocument.from_payload(western_payload("chamomile"), "chamomile", "western"))
    profiles.append(ProfileDocument.from_payload(tcm_payload("lost-herb", "not-in-corpus"), "lost-herb", "tcm"))
    return profiles


def test_merged_view_counts_herbs_plants_and_orphans() -> None:
    result = IndexBuilder().build_from_records(_plants(), _profiles(), generated=GENERATED)

    assert len(result.herbs) == 10
    types = [entry["type"] for entry in result.herbs]
    assert types.count("herb") == 5
    assert types.count("plant") == 5
    assert [entry["slug"] for entry in result.orphans] == ["lost-herb"]
    assert result.orphans[0]["reason"] == "unresolved"
    assert "lost-herb" not in {slug for entry in result.herbs for slug in entry["profiles"].values()}
    assert len(result.profiles) == 6


def test_merged_entries_carry_profiles_and_categories() -> None:
    result = IndexBuilder().build_from_records(_plants(), _profiles(), generated=GENERATED)
    by_slug = {entry["slug"]: entry for entry in result.herbs}

    ginseng = by_slug["ginseng"]
    assert ginseng["profiles"] == {"tcm": "ren-shen"}
    assert ginseng["tcmSlug"] == "ren-shen"
    assert ginseng["pinyin"] == "Ren Shen"
    assert ginseng["category"] == "chinese-herbs"

    assert by_slug["chamomile"]["category"] == "western-herbs"
    assert by_slug["vitamin-c"]["category"] == "vitamins"
    assert by_slug["zinc"]["category"] == "minerals"
    assert by_slug["lecithin"]["category"] == "nutrients"
    assert by_slug["nettle"]["category"] == "western-herbs"


def test_duplicate_documents_are_counted_and_skipped() -> None:
    plants = _plants() + [PlantDocument.from_payload(plant_payload("ginseng"), "ginseng-copy")]
    result = IndexBuilder().build_from_records(plants, [], generated=GENERATED)
    assert result.duplicates == ["plant/ginseng"]
    assert len(result.herbs) == 10


def test_malformed_plant_reference_is_listed_separately() -> None:
    profile = ProfileDocument.from_payload(tcm_payload("bad-ref", derivedFromPlant=42), "bad-ref", "tcm")
    result = IndexBuilder().build_from_records(_plants(), [profile], generated=GENERATED)
    assert [entry["reason"] for entry in result.orphans] == ["malformed"]
    assert result.reference_report() == {"unresolved": [], "malformed": result.orphans}


def test_artifacts_satisfy_their_schemas() -> None:
    result = IndexBuilder().build_from_records(_plants(), _profiles(), generated=GENERATED)
    for name, payload in result.artifacts().items():
        assert artifact_errors(name, payload) == [], name
    index = result.index_document()
    assert index["counts"]["total"] == 10
    assert index["counts"]["orphans"] == 1
    assert index["counts"]["profiles"] == {"tcm": 5, "ayurveda": 0, "western": 1}
    assert sum(item["count"] for item in index["categories"]) == 10


def test_invalid_artifact_raises() -> None:
    with pytest.raises(IndexBuildError):
        validate_artifact("plants.json", {"version": "1.0", "generated": GENERATED, "plants": [{"slug": ""}]})


def test_build_reads_corpus_and_writes_artifacts(corpus, settings) -> None:
    corpus.plant("ginseng")
    corpus.plant("nettle", scientific_name="Urtica dioica")
    corpus.tcm("ren-shen", plant_slug="ginseng")
    corpus.plant("broken", payload="[]")

    builder = IndexBuilder(settings)
    result = builder.build(generated=GENERATED)
    assert len(result.parse_failures) == 1
    written = builder.write(result)

    assert sorted(path.name for path in written) == ["categories.json", "index.json", "plants.json", "profiles.json"]
    index = json.loads((settings.output_dir / "index.json").read_text(encoding="utf-8"))
    assert index["generated"] == GENERATED
    assert {entry["slug"]: entry["type"] for entry in index["herbs"]} == {"ginseng": "herb", "nettle": "plant"}


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"plant_category": {"@id": "category/minerals"}, "tcm_category": {"@id": "category/tonify-qi"}}, "minerals"),
        ({"tcm_category": {"@id": "category/unknown"}}, "chinese-herbs"),
        ({"systems": ["ayurveda"]}, "ayurvedic-herbs"),
        ({"tcm_category": {"@id": "category/tonify-qi"}, "systems": ["tcm"]}, "chinese-herbs"),
        ({}, "western-herbs"),
    ],
)
def test_category_precedence(kwargs, expected) -> None:
    assert classify("some-herb", **kwargs) == expected


@pytest.mark.parametrize(
    ("slug", "system", "expected"),
    [("vitamin-c", "western", "vitamins"), ("zinc", "ayurveda", "minerals"), ("lecithin", "western", "nutrients")],
)
def test_slug_heuristics_outrank_profile_system(slug, system, expected) -> None:
    assert classify(slug, systems=[system]) == expected


def test_supplement_with_western_profile_is_filed_by_slug() -> None:
    plants = [PlantDocument.from_payload(plant_payload("vitamin-c"), "vitamin-c")]
    profiles = [ProfileDocument.from_payload(western_payload("vitamin-c"), "vitamin-c", "western")]
    result = IndexBuilder().build_from_records(plants, profiles, generated=GENERATED)
    assert result.herbs[0]["type"] == "herb"
    assert result.herbs[0]["category"] == "vitamins"


def test_plant_with_non_text_family_does_not_block_the_index(corpus, settings) -> None:
    corpus.plant("ginseng", family="Araliaceae")
    corpus.plant("nettle", scientific_name="Urtica dioica", family={"en": "Urticaceae"}, image=["a.jpg"])

    builder = IndexBuilder(settings)
    written = builder.write(builder.build(generated=GENERATED))

    assert len(written) == 4
    index = json.loads((settings.output_dir / "index.json").read_text(encoding="utf-8"))
    by_slug = {entry["slug"]: entry for entry in index["herbs"]}
    assert by_slug["ginseng"]["family"] == "Araliaceae"
    assert by_slug["nettle"]["family"] is None
    assert by_slug["nettle"]["image"] is None
    assert by_slug["nettle"]["scientificName"] == "Urtica dioica"
