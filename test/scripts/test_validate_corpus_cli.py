"""Tests for the corpus validation command."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path

import pytest
from conftest import tcm_payload

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

validate_cli = importlib.import_module("scripts.validate_corpus")


def test_missing_tcm_nature_fails_with_one_missing_field_error(corpus, tmp_path: Path, capsys) -> None:
    corpus.plant("ginseng")
    payload = tcm_payload("ren-shen", "ginseng")
    del payload["hasNature"]
    profile = corpus.tcm("ren-shen", payload=payload)
    report_path = tmp_path / "validation-report.json"

    code = validate_cli.main(["--data-root", str(corpus.root), "--report", str(report_path)])

    assert code == 1
    output = capsys.readouterr().out
    assert "[fail] systems/tcm/herbs/ren-shen/profile.jsonld" in output
    assert "MissingField" in output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["summary"]["errors"] == 1
    failed = [item for item in report["files"] if not item["valid"]]
    assert [(item["slug"], [error["field"] for error in item["errors"]]) for item in failed] == [
        ("ren-shen", ["hasNature"])
    ]
    assert failed[0]["errors"][0]["kind"] == "MissingField"

    payload["hasNature"] = {"@id": "nature/warm"}
    corpus.tcm("ren-shen", payload=payload)
    assert profile.exists()
    assert validate_cli.main(["--data-root", str(corpus.root)]) == 0


def test_role_filter_limits_checked_documents(corpus, capsys) -> None:
    corpus.plant("ginseng", scientific_name=None)
    corpus.tcm("ren-shen", plant_slug="ginseng")

    assert validate_cli.main(["--data-root", str(corpus.root), "--role", "tcm"]) == 0
    output = capsys.readouterr().out
    assert "[validate] 1 documents: 1 passed, 0 failed" in output

    assert validate_cli.main(["--data-root", str(corpus.root), "--role", "plant"]) == 1


def test_missing_data_root_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Data root not found"):
        validate_cli.main(["--data-root", str(tmp_path / "nowhere")])
