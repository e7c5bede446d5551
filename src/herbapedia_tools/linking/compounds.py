"""Curated chemical-compound references for well-studied plants."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Literal, Mapping

from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.uris import iter_references, local_id, reference_id

LOGGER = get_logger(__name__)

COMPOUND_MAP: dict[str, tuple[str, ...]] = {
    "ginseng": ("chemical/ginsenosides", "chemical/polysaccharides", "chemical/saponins"),
    "american-ginseng": ("chemical/ginsenosides", "chemical/polysaccharides"),
    "turmeric": ("chemical/curcumin", "chemical/flavonoids"),
    "ginger": ("chemical/gingerol", "chemical/essential-oils"),
    "green-tea": ("chemical/catechins", "chemical/flavonoids", "chemical/tannins"),
    "grape-seed": ("chemical/anthocyanins", "chemical/flavonoids"),
    "bilberry": ("chemical/anthocyanins", "chemical/flavonoids"),
    "blueberry": ("chemical/anthocyanins", "chemical/flavonoids"),
    "milk-thistle": ("chemical/silymarin", "chemical/flavonoids"),
    "valerian": ("chemical/alkaloids", "chemical/essential-oils"),
    "chamomile": ("chemical/essential-oils", "chemical/flavonoids"),
    "st-johns-wort": ("chemical/flavonoids", "chemical/tannins"),
    "hawthorn": ("chemical/flavonoids", "chemical/tannins"),
    "ginkgo": ("chemical/flavonoids", "chemical/terpenes"),
    "echinacea": ("chemical/alkaloids", "chemical/polysaccharides"),
    "garlic": ("chemical/essential-oils", "chemical/flavonoids"),
    "dandelion": ("chemical/flavonoids", "chemical/tannins"),
    "saw-palmetto": ("chemical/flavonoids", "chemical/essential-oils"),
    "lingzhi-reishi": ("chemical/polysaccharides", "chemical/terpenes"),
    "cordyceps": ("chemical/polysaccharides", "chemical/nucleosides"),
    "goji": ("chemical/polysaccharides", "chemical/flavonoids"),
    "huangqi": ("chemical/saponins", "chemical/flavonoids"),
    "dangshen": ("chemical/polysaccharides", "chemical/saponins"),
    "licorice-root": ("chemical/saponins", "chemical/flavonoids"),
}

# Concepts referenced by COMPOUND_MAP that older chemical datasets lack.
ADDITIONAL_COMPOUNDS: tuple[dict[str, Any], ...] = (
    {
        "@id": "chemical/nucleosides",
        "@type": "herbapedia:ChemicalCompound",
        "prefLabel": {"en": "Nucleosides", "zh-Hant": "核苷", "zh-Hans": "核苷"},
        "description": {
            "en": "Building blocks of DNA and RNA with various biological activities",
            "zh-Hant": "DNA和RNA的構建塊，具有多種生物活性",
            "zh-Hans": "DNA和RNA的构建块，具有多种生物活性",
        },
    },
)

CompoundStatus = Literal["added", "already_linked", "unmapped"]


@dataclass(slots=True)
class CompoundChange:
    slug: str
    status: CompoundStatus
    compounds: list[str] = field(default_factory=list)
    document: dict[str, Any] | None = None


def utc_timestamp(moment: datetime | None = None) -> str:
    value = moment or datetime.now(timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def link_compounds(
    document: dict[str, Any],
    slug: str,
    table: Mapping[str, Iterable[str]] = COMPOUND_MAP,
    *,
    now: datetime | None = None,
) -> CompoundChange:
    """Attach ``containsChemical`` from ``table``; documents that already list compounds are left alone."""
    compounds = list(table.get(slug, ()))
    if not compounds:
        return CompoundChange(slug=slug, status="unmapped")
    if iter_references(document.get("containsChemical")):
        return CompoundChange(slug=slug, status="already_linked")
    updated = copy.deepcopy(document)
    updated["containsChemical"] = [{"@id": item} for item in compounds]
    updated["modified"] = utc_timestamp(now)
    LOGGER.debug("compounds.added", slug=slug, count=len(compounds))
    return CompoundChange(slug=slug, status="added", compounds=compounds, document=updated)


def referenced_compounds(table: Mapping[str, Iterable[str]] = COMPOUND_MAP) -> list[str]:
    ordered: list[str] = []
    for compounds in table.values():
        for item in compounds:
            if item not in ordered:
                ordered.append(item)
    return ordered


def missing_compounds(known_ids: Iterable[str], table: Mapping[str, Iterable[str]] = COMPOUND_MAP) -> list[str]:
    """Compound ids used in ``table`` that the chemical dataset does not define."""
    known = {local_id(item) for item in known_ids}
    return [item for item in referenced_compounds(table) if item not in known]


def extend_chemical_dataset(dataset: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Append any :data:`ADDITIONAL_COMPOUNDS` the dataset's ``@graph`` lacks."""
    updated = copy.deepcopy(dataset)
    graph = updated.get("@graph")
    if not isinstance(graph, list):
        graph = []
        updated["@graph"] = graph
    present = {local_id(ref) for ref in (reference_id(item) for item in graph) if ref}
    added: list[str] = []
    for concept in ADDITIONAL_COMPOUNDS:
        if concept["@id"] not in present:
            graph.append(copy.deepcopy(concept))
            added.append(concept["@id"])
    return updated, added
