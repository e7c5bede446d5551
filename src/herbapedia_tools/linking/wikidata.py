"""Wikidata entity search and SPARQL taxon lookup."""

from __future__ import annotations

import json
from typing import Any

from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import ExternalMatch
from herbapedia_tools.core.uris import build_wikidata_url, extract_qid

from .http import JsonServiceClient
from .rate_limit import RateLimiter

LOGGER = get_logger(__name__)

# Descriptions of search hits that indicate a taxon rather than a person or place.
TAXON_KEYWORDS: tuple[str, ...] = ("plant", "species", "taxon", "herb", "tree", "flower")

# Q16521 taxon, Q756 plant, Q729 animal
TAXON_CLASSES: tuple[str, ...] = ("wd:Q16521", "wd:Q756", "wd:Q729")

SPARQL_TEMPLATE = """SELECT ?item WHERE {{
  ?item wdt:P225 {name} .
  ?item wdt:P31 ?instance .
  VALUES ?instance {{ {classes} }}
}}
LIMIT 1
"""


def build_taxon_query(name: str) -> str:
    # json.dumps yields a quoted, escaped literal that SPARQL accepts.
    return SPARQL_TEMPLATE.format(name=json.dumps(name, ensure_ascii=False), classes=" ".join(TAXON_CLASSES))


def looks_like_taxon(description: str | None) -> bool:
    text = (description or "").lower()
    return any(keyword in text for keyword in TAXON_KEYWORDS)


class WikidataClient(JsonServiceClient):
    service_name = "wikidata"

    def search_entities(self, label: str) -> list[dict[str, Any]]:
        LOGGER.debug("wikidata.search", label=label)
        payload = self._request_json(
            "GET",
            str(self._settings.wikidata_api_url),
            params={
                "action": "wbsearchentities",
                "search": label,
                "language": "en",
                "format": "json",
                "limit": self._settings.wikidata_search_limit,
                "strict": "false",
            },
            timeout=self._settings.wikidata_search_timeout,
        )
        results = payload.get("search") if isinstance(payload, dict) else None
        return [item for item in results or [] if isinstance(item, dict)]

    def query_taxon(self, scientific_name: str) -> list[dict[str, Any]]:
        LOGGER.debug("wikidata.sparql", name=scientific_name)
        payload = self._request_json(
            "POST",
            str(self._settings.wikidata_sparql_url),
            data={"query": build_taxon_query(scientific_name)},
            headers={"Accept": "application/sparql-results+json"},
            timeout=self._settings.wikidata_sparql_timeout,
        )
        if not isinstance(payload, dict):
            return []
        bindings = (payload.get("results") or {}).get("bindings")
        return [item for item in bindings or [] if isinstance(item, dict)]


class WikidataTarget:
    """Links documents to Wikidata items.

    Label search is tried for every candidate name; the SPARQL taxon-name
    query runs once, for the first candidate, after all searches miss. Neither
    source reports a confidence, so accepted matches carry ``None``.
    """

    service = "wikidata"
    domain = "wikidata.org"
    id_property = "wikidataId"
    has_fallback = True

    def __init__(self, client: WikidataClient) -> None:
        self._client = client
        self._entity_base = client.settings.wikidata_entity_base

    def lookup(self, name: str) -> list[ExternalMatch]:
        matches: list[ExternalMatch] = []
        for item in self._client.search_entities(name):
            qid = item.get("id")
            if not isinstance(qid, str) or not looks_like_taxon(item.get("description")):
                continue
            matches.append(
                ExternalMatch(
                    external_id=qid,
                    matched_name=str(item.get("label") or name),
                    match_kind="search",
                    description=item.get("description"),
                )
            )
            break
        return matches

    def fallback(self, names: list[str]) -> list[ExternalMatch]:
        if not names:
            return []
        for binding in self._client.query_taxon(names[0]):
            value = (binding.get("item") or {}).get("value")
            qid = extract_qid(value) if isinstance(value, str) else None
            if qid:
                return [ExternalMatch(external_id=qid, matched_name=names[0], match_kind="sparql")]
        return []

    def bind_limiter(self, limiter: RateLimiter) -> None:
        self._client.limiter = limiter

    def url_for(self, external_id: str) -> str:
        return build_wikidata_url(self._entity_base, external_id)

    def id_value(self, external_id: str) -> Any:
        return external_id

    def close(self) -> None:
        self._client.close()
