from __future__ import annotations

from pathlib import Path

import pytest
from conftest import plant_payload, tcm_payload

from herbapedia_tools.core.exceptions import DocumentParseError
from herbapedia_tools.core.json_utils import dump_document, load_document, parse_document
from herbapedia_tools.core.models import DocumentRole
from herbapedia_tools.corpus import PlantDocument, ProfileDocument, detect_role, find_documents, preferred_text


@pytest.mark.parametrize(
    ("relative", "expected"),
    [
        ("entities/plants/ginseng/entity.jsonld", DocumentRole.PLANT),
        ("entities/plants/ginseng/notes.jsonld", None),
        ("systems/tcm/herbs/ren-shen/profile.jsonld", DocumentRole.TCM_PROFILE),
        ("systems/ayurveda/dravyas/ashwagandha/profile.jsonld", DocumentRole.AYURVEDA_PROFILE),
        ("systems/western/herbs/chamomile/profile.jsonld", DocumentRole.WESTERN_PROFILE),
        ("systems/tcm/reference/natures.jsonld", DocumentRole.REFERENCE_DATASET),
        ("reference/chemicals.jsonld", DocumentRole.REFERENCE_DATASET),
        ("schema/context/plant.jsonld", None),
        ("README.jsonld", None),
    ],
)
def test_detect_role(relative: str, expected: DocumentRole | None) -> None:
    root = Path("/corpus")
    assert detect_role(root / relative, root) is expected


def test_find_documents_filters_by_role_and_slug(corpus) -> None:
    corpus.plant("ginseng")
    corpus.plant("ginger")
    corpus.tcm("ren-shen", plant_slug="ginseng")
    corpus.reference("natures", [{"@id": "nature/warm"}])
    corpus.write("dist/index.jsonld", {})

    everything = find_documents(corpus.root)
    assert [(item.role, item.slug) for item in everything] == [
        (DocumentRole.PLANT, "ginger"),
        (DocumentRole.PLANT, "ginseng"),
        (DocumentRole.TCM_PROFILE, "ren-shen"),
        (DocumentRole.REFERENCE_DATASET, "natures"),
    ]
    plants = find_documents(corpus.root, DocumentRole.PLANT, slug="ginseng")
    assert [item.slug for item in plants] == ["ginseng"]
    assert find_documents(corpus.root / "missing", DocumentRole.PLANT) == []


def test_codec_rejects_non_objects_and_bad_json(tmp_path: Path) -> None:
    with pytest.raises(DocumentParseError) as excinfo:
        parse_document("[1, 2]", source="list.jsonld")
    assert "expected a JSON object" in excinfo.value.reason

    path = tmp_path / "bad.jsonld"
    path.write_text('{"name": ', encoding="utf-8")
    with pytest.raises(DocumentParseError) as excinfo:
        load_document(path)
    assert excinfo.value.path == path
    assert "invalid JSON" in excinfo.value.reason


def test_dump_document_uses_corpus_formatting(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "entity.jsonld"
    dump_document({"name": {"zh-Hant": "人參"}}, path)
    assert path.read_text(encoding="utf-8") == '{\n  "name": {\n    "zh-Hant": "人參"\n  }\n}\n'
    assert list(path.parent.iterdir()) == [path]


def test_plant_record_round_trips_unknown_keys() -> None:
    payload = plant_payload("ginseng", hasPart=[{"@id": "plant/ginseng#root"}], sameAs="https://example.org/x")
    record = PlantDocument.from_payload(payload, "ginseng")
    assert record.scientific_name == "Panax ginseng"
    assert record.same_as == ["https://example.org/x"]
    assert "hasPart" in record.extra
    assert record.to_payload() == payload


def test_profile_record_lifts_classification() -> None:
    record = ProfileDocument.from_payload(tcm_payload("ren-shen", "ginseng"), "ren-shen", "tcm")
    assert record.plant_slug == "ginseng"
    assert record.classification["pinyin"] == "Ren Shen"
    assert record.classification["hasNature"] == {"@id": "nature/warm"}


def test_preferred_text_falls_back_through_languages() -> None:
    assert preferred_text({"zh-Hant": "人參"}) == "人參"
    assert preferred_text({"en": " ", "zh-Hans": "人参"}, ("en", "zh-Hans")) == "人参"
    assert preferred_text(None, default="ginseng") == "ginseng"
