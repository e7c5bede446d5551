"""Scientific-name cleanup ahead of external taxonomy lookups.

Names in the corpus were transcribed from product labels and carry typos,
outdated synonyms and author citations (``Thunb.``, ``(L.) Moench``) that make
GBIF and Wikidata lookups miss. ``normalize_scientific_name`` turns such a
string into an ordered list of lookup candidates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final, Mapping, Sequence

# Known misspellings and superseded names, matched as substrings of the raw value.
TYPO_CORRECTIONS: Final[dict[str, str]] = {
    "Atractytlodes": "Atractylodes",
    "Miltorrhiza": "miltiorrhiza",
    "Ziaiphus Jujube Mill. Var. Spinosa": "Ziziphus jujuba var. spinosa",
    "Corus officinalis": "Cornus officinalis",
    "Coriolus Versicolour, Trametes versicolor": "Trametes versicolor",
    "Arctium lappi": "Arctium lappa",
    "Serenoa Serrulata": "Serenoa repens",
    "Rhodiola Sacra": "Rhodiola rosea",
    "Rosmarinus Officinalis": "Salvia rosmarinus",
    "Citrus Reticulate Blanco": "Citrus reticulata",
    "Ostrea Gigas": "Crassostrea gigas",
    "Cynomorium songaricum Rupr.": "Cynomorium coccineum",
    "Albizzia Julibrissin Durazz": "Albizia julibrissin",
    "Morindae Officinalis": "Morinda officinalis",
    "Achyranthis bidentatae": "Achyranthes bidentata",
    "Polygonum Bistortae": "Bistorta officinalis",
    "Cimicifuga heracleifolia Kom.": "Actaea heracleifolia",
    "radix angelicae pubescentisa": "Angelica pubescens",
    "Artemisiae Argyi": "Artemisia argyi",
    "Ligusticum chuanxiong Hort": "Ligusticum striatum",
    "Gastrodia elatae": "Gastrodia elata",
    "Alisma orientalis": "Alisma plantago-aquatica",
    "Polygonum multiflorum Thunb.": "Reynoutria multiflora",
    "Polygonum multiflorum Thunb": "Reynoutria multiflora",
    "Zea Mays (LINN.)": "Zea mays",
    "Vaccinium Macrocarpon": "Vaccinium macrocarpon",
    "Magnolia denudata": "Magnolia denudata",
}

AUTHOR_CITATIONS: Final[tuple[str, ...]] = (
    "Y. C. Ma", "Y C Ma",
    "L.", "Bge.", "Hort", "Oliv.", "Thunb.", "Durazz", "Michx.",
    "Rupr.", "Ma", "Kom.", "Lindl.", "Lam", "DC.", "C.A.Mey",
    "C. A. Mey", "Harv.", "Setch.", "Blanco", "(LINN.)",
    "Ramat.", "Sacc.", "Nannf.", "Moench", "Gaertn", "Batsch",
    "Franch.", "BerK.", "Vent. Ex Pers.", "Vent Ex Pers.", "Fischer",
    "(Harv.) Setch.", "(Franch.) Nannf.", "(BerK.) Sacc.",
    "(Vent. Ex Pers.) Fischer", "(Vent Ex Pers.) Fischer",
    "(L.) Moench", "(L.) Gaertn", "(L.) Batsch", "(Thunb.) DC.",
    "(DC. ) Koidz.", "Koidz.", "Thumb", "(Thumb)",
    "C. A. Mey.",
)

# Processed materials and chemical names that have no taxon to look up.
SKIP_SUBSTRINGS: Final[tuple[str, ...]] = (
    "Massa Fermentata",
    "Processed",
    "Carapace",
    "fatty acids",
    "Tocopherol",
    "Retinol",
    "Ascorbic",
)
SKIP_TOKENS: Final[tuple[str, ...]] = ("DHA", "EPA", "GLA", "LA", "AA")

_EX_CLAUSE = re.compile(r"\s*\([A-Za-z.\s]+ Ex [A-Za-z.\s]+\)\s*", re.IGNORECASE)
_PAREN_CLAUSE = re.compile(r"\s*\([A-Za-z.\s]+\)\s*")
_SKIP_TOKEN_RE = re.compile(r"(?<![A-Za-z0-9])(?:" + "|".join(SKIP_TOKENS) + r")(?![A-Za-z0-9])")


def _citation_pattern(citations: Sequence[str]) -> re.Pattern[str]:
    ordered = sorted(dict.fromkeys(citations), key=len, reverse=True)
    alternatives = "|".join(re.escape(item) for item in ordered)
    return re.compile(rf"(?<![\w.\-])(?:{alternatives})(?![\w\-])")


_CITATION_RE = _citation_pattern(AUTHOR_CITATIONS)


@dataclass(slots=True, frozen=True)
class NormalizedName:
    raw: str
    cleaned: str
    candidates: list[str] = field(default_factory=list)
    skipped: bool = False
    reason: str | None = None

    @property
    def changed(self) -> bool:
        return not self.skipped and self.cleaned != self.raw


def skip_reason(name: str) -> str | None:
    lowered = name.lower()
    for pattern in SKIP_SUBSTRINGS:
        if pattern.lower() in lowered:
            return f"non-scientific: {pattern}"
    match = _SKIP_TOKEN_RE.search(name)
    if match:
        return f"non-scientific: {match.group(0)}"
    return None


def apply_corrections(name: str, table: Mapping[str, str] = TYPO_CORRECTIONS) -> str:
    """Replace known typos; overlapping matches go to the longest, then the earliest declared."""
    spans: list[tuple[int, int, int, str]] = []
    for order, (typo, correction) in enumerate(table.items()):
        start = name.find(typo)
        if start >= 0:
            spans.append((start, start + len(typo), order, correction))
    spans.sort(key=lambda span: (-(span[1] - span[0]), span[2]))
    accepted: list[tuple[int, int, int, str]] = []
    for span in spans:
        if all(span[1] <= other[0] or span[0] >= other[1] for other in accepted):
            accepted.append(span)
    if not accepted:
        return name
    accepted.sort()
    parts: list[str] = []
    cursor = 0
    for start, end, _, correction in accepted:
        parts.append(name[cursor:start])
        parts.append(correction)
        cursor = end
    parts.append(name[cursor:])
    return "".join(parts)


def strip_author_citations(name: str) -> str:
    text = _EX_CLAUSE.sub(" ", name)
    text = _PAREN_CLAUSE.sub(" ", text)
    return _CITATION_RE.sub(" ", text)


def tidy(name: str) -> str:
    text = name.replace(",", " ")
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\s+\.", "", text)
    text = re.sub(r"\(\s*\)", "", text)
    text = re.sub(r"\(\s+", "(", text)
    text = re.sub(r"\s+\)", ")", text)
    text = re.sub(r"\s+", " ", text).strip()
    if text.endswith("."):
        text = text[:-1]
    return text


def normalize_scientific_name(raw: str | None) -> NormalizedName:
    """Clean ``raw`` and return the lookup candidates, cleaned form first."""
    original = (raw or "").strip()
    if not original:
        return NormalizedName(raw="", cleaned="", candidates=[], skipped=True, reason="no_scientific_name")
    reason = skip_reason(original)
    if reason:
        return NormalizedName(raw=original, cleaned=original, candidates=[], skipped=True, reason=reason)
    cleaned = tidy(strip_author_citations(apply_corrections(original))) or original
    candidates = [cleaned] if cleaned == original else [cleaned, original]
    return NormalizedName(raw=original, cleaned=cleaned, candidates=candidates)
