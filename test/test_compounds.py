from __future__ import annotations

from datetime import datetime, timezone

from conftest import plant_payload

from herbapedia_tools.linking.compounds import (
    COMPOUND_MAP,
    extend_chemical_dataset,
    link_compounds,
    missing_compounds,
    referenced_compounds,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_curated_compounds_are_added_with_timestamp() -> None:
    document = plant_payload("ginseng")
    change = link_compounds(document, "ginseng", now=NOW)
    assert change.status == "added"
    assert change.document["containsChemical"] == [{"@id": item} for item in COMPOUND_MAP["ginseng"]]
    assert change.document["modified"] == "2026-03-01T12:00:00.000Z"
    assert "containsChemical" not in document


def test_existing_compounds_are_left_alone() -> None:
    document = plant_payload("ginseng", containsChemical=[{"@id": "chemical/other"}])
    change = link_compounds(document, "ginseng", now=NOW)
    assert change.status == "already_linked"
    assert change.document is None


def test_unmapped_slug_is_reported() -> None:
    assert link_compounds(plant_payload("nettle"), "nettle").status == "unmapped"


def test_missing_compounds_lists_ids_absent_from_dataset() -> None:
    known = [item for item in referenced_compounds() if item != "chemical/nucleosides"]
    assert missing_compounds(known) == ["chemical/nucleosides"]


def test_extend_chemical_dataset_is_idempotent() -> None:
    dataset = {"@id": "reference/chemicals", "@graph": [{"@id": "chemical/curcumin"}]}
    updated, added = extend_chemical_dataset(dataset)
    assert added == ["chemical/nucleosides"]
    assert len(updated["@graph"]) == 2
    assert len(dataset["@graph"]) == 1
    again, added_again = extend_chemical_dataset(updated)
    assert added_again == []
    assert again == updated
