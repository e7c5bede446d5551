from __future__ import annotations

import pytest

from herbapedia_tools.names import normalize_scientific_name
from herbapedia_tools.names.normalizer import apply_corrections, skip_reason, strip_author_citations, tidy


def test_typo_and_author_citation_are_corrected() -> None:
    result = normalize_scientific_name("Polygonum multiflorum Thunb.")
    assert result.cleaned == "Reynoutria multiflora"
    assert result.candidates == ["Reynoutria multiflora", "Polygonum multiflorum Thunb."]
    assert result.changed


def test_clean_name_with_variety_is_unchanged() -> None:
    result = normalize_scientific_name("Ziziphus jujuba var. spinosa")
    assert result.cleaned == "Ziziphus jujuba var. spinosa"
    assert result.candidates == ["Ziziphus jujuba var. spinosa"]
    assert not result.changed


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Panax ginseng C. A. Mey.", "Panax ginseng"),
        ("Fagopyrum esculentum (L.) Moench", "Fagopyrum esculentum"),
        ("Zea Mays (LINN.)", "Zea mays"),
        ("Atractytlodes macrocephala Koidz.", "Atractylodes macrocephala"),
    ],
)
def test_common_label_forms(raw: str, expected: str) -> None:
    assert normalize_scientific_name(raw).cleaned == expected


@pytest.mark.parametrize(
    "raw",
    ["Massa Fermentata Medicinalis", "Processed Aconite", "Omega-3 fatty acids", "Fish oil (DHA)"],
)
def test_processed_materials_and_chemicals_are_skipped(raw: str) -> None:
    result = normalize_scientific_name(raw)
    assert result.skipped
    assert result.candidates == []
    assert result.reason and result.reason.startswith("non-scientific")


def test_skip_tokens_match_whole_words_only() -> None:
    assert skip_reason("Lavandula angustifolia") is None
    assert skip_reason("Camellia sinensis") is None
    assert skip_reason("Evening primrose GLA") == "non-scientific: GLA"


def test_empty_name_is_skipped() -> None:
    result = normalize_scientific_name("  ")
    assert result.skipped
    assert result.reason == "no_scientific_name"


def test_citations_inside_words_are_kept() -> None:
    # "Ma" and "L." must not be cut out of ordinary epithets
    assert tidy(strip_author_citations("Ephedra sinica Stapf Mahuang")) == "Ephedra sinica Stapf Mahuang"
    assert tidy(strip_author_citations("Lonicera japonica")) == "Lonicera japonica"


def test_overlapping_corrections_prefer_longest_match() -> None:
    table = {"Polygonum multiflorum Thunb": "short", "Polygonum multiflorum Thunb.": "long"}
    assert apply_corrections("Polygonum multiflorum Thunb.", table) == "long"
