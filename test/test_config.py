from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from herbapedia_tools.core.config import Settings, _load_settings_overrides


def test_toml_sections_override_defaults(tmp_path: Path) -> None:
    config = tmp_path / "herbapedia.toml"
    config.write_text(
        "\n".join(
            [
                "[herbapedia]",
                'data_root = "corpus"',
                "confidence_threshold = 90",
                "unknown_key = 1",
                "",
                "[gbif]",
                'timeout = "7.5"',
                "",
                "[wikidata]",
                "search_timeout = 2",
            ]
        ),
        encoding="utf-8",
    )
    overrides = _load_settings_overrides(config)
    assert overrides == {
        "data_root": "corpus",
        "confidence_threshold": 90,
        "gbif_timeout": 7.5,
        "wikidata_search_timeout": 2.0,
    }
    settings = Settings(**overrides)
    assert settings.data_root == Path("corpus")
    assert settings.confidence_threshold == 90


def test_missing_config_file_yields_no_overrides(tmp_path: Path) -> None:
    assert _load_settings_overrides(tmp_path / "absent.toml") == {}


def test_rate_limit_delay_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(rate_limit_delay=0)


def test_environment_variables_are_read(monkeypatch) -> None:
    monkeypatch.setenv("HERBAPEDIA_CONFIDENCE_THRESHOLD", "85")
    assert Settings().confidence_threshold == 85


def test_http_headers_carry_user_agent() -> None:
    headers = Settings(user_agent="Tester/1.0").http_headers()
    assert headers["User-Agent"] == "Tester/1.0"
