"""GBIF species-match client and link target."""

from __future__ import annotations

from typing import Any

from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import ExternalMatch
from herbapedia_tools.core.uris import build_gbif_url

from .http import JsonServiceClient
from .rate_limit import RateLimiter

LOGGER = get_logger(__name__)


class GbifClient(JsonServiceClient):
    """Wrapper around ``/v1/species/match``."""

    service_name = "gbif"

    def match(self, name: str) -> dict[str, Any]:
        LOGGER.debug("gbif.request", name=name)
        payload = self._request_json(
            "GET",
            str(self._settings.gbif_match_url),
            params={"name": name, "strict": "false", "verbose": "true"},
            timeout=self._settings.gbif_timeout,
        )
        if not isinstance(payload, dict):
            return {}
        return payload


def to_match(payload: dict[str, Any]) -> ExternalMatch | None:
    """Convert a match payload; ``None`` when GBIF reports no usable species."""
    match_type = str(payload.get("matchType") or "").strip()
    species_key = payload.get("speciesKey")
    if not match_type or match_type.upper() == "NONE" or species_key in (None, ""):
        return None
    confidence = payload.get("confidence")
    return ExternalMatch(
        external_id=str(species_key),
        matched_name=str(payload.get("scientificName") or payload.get("canonicalName") or ""),
        match_kind=match_type,
        confidence=int(confidence) if isinstance(confidence, (int, float)) else 0,
    )


class GbifTarget:
    """Links plant entities to GBIF species pages."""

    service = "gbif"
    domain = "gbif.org"
    id_property = "gbifId"
    has_fallback = False

    def __init__(self, client: GbifClient) -> None:
        self._client = client
        self._species_base = client.settings.gbif_species_base

    def lookup(self, name: str) -> list[ExternalMatch]:
        match = to_match(self._client.match(name))
        return [match] if match else []

    def fallback(self, names: list[str]) -> list[ExternalMatch]:
        return []

    def bind_limiter(self, limiter: RateLimiter) -> None:
        self._client.limiter = limiter

    def url_for(self, external_id: str) -> str:
        return build_gbif_url(self._species_base, external_id)

    def id_value(self, external_id: str) -> Any:
        return int(external_id) if external_id.isdigit() else external_id

    def close(self) -> None:
        self._client.close()
