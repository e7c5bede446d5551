"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("herbapedia.toml")


class Settings(BaseSettings):
    """Central configuration for the Herbapedia maintenance tooling."""

    data_root: Path = Path(".")
    output_dir: Path = Path("dist")
    document_suffixes: tuple[str, ...] = (".jsonld",)

    gbif_match_url: HttpUrl = "https://api.gbif.org/v1/species/match"
    gbif_species_base: str = "https://www.gbif.org/species"
    gbif_timeout: float = 5.0

    wikidata_api_url: HttpUrl = "https://www.wikidata.org/w/api.php"
    wikidata_sparql_url: HttpUrl = "https://query.wikidata.org/sparql"
    wikidata_entity_base: str = "https://www.wikidata.org/wiki"
    wikidata_search_timeout: float = 3.0
    wikidata_sparql_timeout: float = 5.0
    wikidata_search_limit: int = 3

    user_agent: str = "Herbapedia/1.0 (https://herbapedia.org)"
    rate_limit_delay: float = Field(default=0.2, gt=0)
    confidence_threshold: int = Field(default=80, ge=0, le=100)
    max_retries: int = 1
    retry_backoff: float = 0.5

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(env_prefix="HERBAPEDIA_", env_file=(), extra="ignore")

    def http_headers(self) -> dict[str, str]:
        """Headers sent with every outbound request."""
        return {"User-Agent": self.user_agent, "Accept": "application/json"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    overrides = _load_settings_overrides()
    return Settings(**overrides)


def _load_settings_overrides(config_path: Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load configuration overrides from the optional TOML file."""
    if not config_path.exists():
        return {}
    data = _read_toml(config_path)
    overrides: dict[str, Any] = {}

    gbif_cfg = _extract_section(data, "gbif")
    if gbif_cfg:
        overrides.update(
            {
                "gbif_match_url": gbif_cfg.get("match_url"),
                "gbif_species_base": gbif_cfg.get("species_base"),
                "gbif_timeout": _coerce_float(gbif_cfg.get("timeout")),
            }
        )

    wikidata_cfg = _extract_section(data, "wikidata")
    if wikidata_cfg:
        overrides.update(
            {
                "wikidata_api_url": wikidata_cfg.get("api_url"),
                "wikidata_sparql_url": wikidata_cfg.get("sparql_url"),
                "wikidata_search_timeout": _coerce_float(wikidata_cfg.get("search_timeout")),
                "wikidata_sparql_timeout": _coerce_float(wikidata_cfg.get("sparql_timeout")),
            }
        )

    general_cfg = data.get("herbapedia") or {}
    overrides.update(
        {key: value for key, value in general_cfg.items() if key in Settings.model_fields}
    )
    return {key: value for key, value in overrides.items() if value is not None}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _extract_section(data: dict[str, Any], *candidates: str) -> dict[str, Any] | None:
    for key in candidates:
        section = data.get(key)
        if isinstance(section, dict):
            return section
    return None


def _coerce_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None
