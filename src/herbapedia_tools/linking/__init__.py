"""External cross-reference linking (GBIF, Wikidata) and curated compound links."""

from .compounds import COMPOUND_MAP, CompoundChange, link_compounds, missing_compounds
from .gbif import GbifClient, GbifTarget
from .rate_limit import RateLimiter
from .service import ExternalLinker, LinkTarget, has_link, merge_same_as
from .wikidata import WikidataClient, WikidataTarget

__all__ = [
    "COMPOUND_MAP",
    "CompoundChange",
    "link_compounds",
    "missing_compounds",
    "GbifClient",
    "GbifTarget",
    "RateLimiter",
    "ExternalLinker",
    "LinkTarget",
    "has_link",
    "merge_same_as",
    "WikidataClient",
    "WikidataTarget",
]
