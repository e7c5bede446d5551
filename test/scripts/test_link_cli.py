"""Tests for the GBIF and Wikidata linking commands."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

link_gbif = importlib.import_module("scripts.link_gbif")
link_wikidata = importlib.import_module("scripts.link_wikidata")


def _gbif_handler(requests: list[str]):
    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        requests.append(name)
        if name == "Panax ginseng":
            return httpx.Response(
                200,
                json={"speciesKey": 2871284, "scientificName": "Panax ginseng", "matchType": "EXACT", "confidence": 98},
            )
        return httpx.Response(200, json={"matchType": "NONE", "confidence": 100})

    return handler


def test_link_gbif_writes_links_and_skips_linked_documents(corpus, tmp_path: Path, capsys) -> None:
    ginseng = corpus.plant("ginseng", scientific_name="Panax ginseng C. A. Mey.")
    corpus.plant(
        "ginger",
        scientific_name="Zingiber officinale",
        sameAs=[{"@id": "https://www.gbif.org/species/2757280"}],
    )
    corpus.plant("fermented-leaven", scientific_name="Massa Fermentata")
    requests: list[str] = []
    report_path = tmp_path / "gbif.json"
    client = httpx.Client(transport=httpx.MockTransport(_gbif_handler(requests)))

    code = link_gbif.main(
        ["--data-root", str(corpus.root), "--delay", "0.001", "--report", str(report_path)],
        http_client=client,
    )

    assert code == 0
    assert requests == ["Panax ginseng"]
    document = corpus.read(ginseng)
    assert document["gbifId"] == 2871284
    assert {"@id": "https://www.gbif.org/species/2871284"} in document["sameAs"]
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["counts"]["linked"] == 1
    assert report["counts"]["already_linked"] == 1
    assert report["counts"]["non-scientific: Massa Fermentata"] == 1
    assert "[gbif][ok] ginseng -> https://www.gbif.org/species/2871284" in capsys.readouterr().out


def test_link_gbif_dry_run_leaves_files_untouched(corpus) -> None:
    ginseng = corpus.plant("ginseng", scientific_name="Panax ginseng")
    before = ginseng.read_text(encoding="utf-8")
    client = httpx.Client(transport=httpx.MockTransport(_gbif_handler([])))

    assert link_gbif.main(["--data-root", str(corpus.root), "--delay", "0.001", "--dry-run"], http_client=client) == 0
    assert ginseng.read_text(encoding="utf-8") == before


def test_link_gbif_rejects_zero_delay(corpus) -> None:
    with pytest.raises(SystemExit, match="--delay"):
        link_gbif.main(["--data-root", str(corpus.root), "--delay", "0"])


def test_link_wikidata_links_tcm_profiles_through_their_plant(corpus, tmp_path: Path) -> None:
    corpus.plant("ginseng", scientific_name="Panax ginseng")
    linked = corpus.tcm("ren-shen", plant_slug="ginseng")
    corpus.tcm("orphan", plant_slug="not-in-corpus")
    corpus.tcm("no-ref", derivedFromPlant=None)
    corpus.plant("mystery", scientific_name=None)
    corpus.tcm("mystery-herb", plant_slug="mystery")
    searched: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        searched.append(request.url.params["search"])
        return httpx.Response(
            200,
            json={"search": [{"id": "Q182041", "label": "Panax ginseng", "description": "species of plant"}]},
        )

    report_path = tmp_path / "wikidata.json"
    code = link_wikidata.main(
        ["--data-root", str(corpus.root), "--delay", "0.001", "--report", str(report_path)],
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )

    assert code == 0
    assert searched == ["Panax ginseng"]
    document = corpus.read(linked)
    assert document["wikidataId"] == "Q182041"
    assert document["sameAs"] == [{"@id": "https://www.wikidata.org/wiki/Q182041"}]
    counts = json.loads(report_path.read_text(encoding="utf-8"))["counts"]
    assert counts == {"linked": 1, "plant_not_found": 1, "no_plant_ref": 1, "no_scientific_name": 1}
