"""Display categories for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Iterable

from herbapedia_tools.core.constants import MINERAL_SLUGS, NUTRIENT_SLUG_FRAGMENTS
from herbapedia_tools.core.uris import reference_id, slug_from_id

DEFAULT_CATEGORY: Final[str] = "western-herbs"

# TCM functional categories are all shown under the Chinese herbs heading.
TCM_CATEGORY_MAP: Final[dict[str, str]] = {
    key: "chinese-herbs"
    for key in (
        "tonify-qi",
        "tonify-blood",
        "tonify-yin",
        "tonify-yang",
        "clear-heat",
        "drain-damp",
        "transform-phlegm",
        "regulate-qi",
        "invigorate-blood",
        "calm-spirit",
        "aromatize",
        "tonify-qi-and-yin",
        "digestion",
        "external",
        "reduce-swelling",
        "stop-bleeding",
    )
}

SYSTEM_CATEGORY: Final[dict[str, str]] = {
    "tcm": "chinese-herbs",
    "western": "western-herbs",
    "ayurveda": "ayurvedic-herbs",
}


@dataclass(slots=True, frozen=True)
class DisplayCategory:
    slug: str
    title: dict[str, str]
    description: dict[str, str]

    def as_dict(self, count: int) -> dict[str, Any]:
        return {"slug": self.slug, "title": dict(self.title), "description": dict(self.description), "count": count}


CATEGORIES: Final[tuple[DisplayCategory, ...]] = (
    DisplayCategory(
        "chinese-herbs",
        {"en": "Chinese Herbs", "zh-Hant": "中藥", "zh-Hans": "中药"},
        {"en": "Traditional Chinese Medicine herbs", "zh-Hant": "傳統中藥材", "zh-Hans": "传统中药材"},
    ),
    DisplayCategory(
        "western-herbs",
        {"en": "Western Herbs", "zh-Hant": "西方草本", "zh-Hans": "西方草本"},
        {"en": "Western herbal medicine herbs", "zh-Hant": "西方草本醫學", "zh-Hans": "西方草本医学"},
    ),
    DisplayCategory(
        "ayurvedic-herbs",
        {"en": "Ayurvedic Herbs", "zh-Hant": "阿育吠陀草藥", "zh-Hans": "阿育吠陀草药"},
        {"en": "Herbs of the Ayurvedic tradition", "zh-Hant": "阿育吠陀傳統草藥", "zh-Hans": "阿育吠陀传统草药"},
    ),
    DisplayCategory(
        "vitamins",
        {"en": "Vitamins", "zh-Hant": "維生素", "zh-Hans": "维生素"},
        {"en": "Essential vitamins for health", "zh-Hant": "健康必需維生素", "zh-Hans": "健康必需维生素"},
    ),
    DisplayCategory(
        "minerals",
        {"en": "Minerals", "zh-Hant": "礦物質", "zh-Hans": "矿物质"},
        {"en": "Essential minerals for health", "zh-Hant": "健康必需礦物質", "zh-Hans": "健康必需矿物质"},
    ),
    DisplayCategory(
        "nutrients",
        {"en": "Nutrients", "zh-Hant": "營養素", "zh-Hans": "营养素"},
        {"en": "Essential nutrients and supplements", "zh-Hant": "必需營養素", "zh-Hans": "必需营养素"},
    ),
)

CATEGORY_SLUGS: Final[tuple[str, ...]] = tuple(item.slug for item in CATEGORIES)


def category_from_reference(value: Any) -> str | None:
    """Map a ``category/...`` reference to a display category, if it names one."""
    identifier = reference_id(value)
    if identifier is None:
        return None
    slug = slug_from_id(identifier, prefix="category/")
    if slug in CATEGORY_SLUGS:
        return slug
    return TCM_CATEGORY_MAP.get(slug or "")


def category_from_slug(slug: str) -> str | None:
    if "vitamin-" in slug:
        return "vitamins"
    if slug in MINERAL_SLUGS:
        return "minerals"
    if any(fragment in slug for fragment in NUTRIENT_SLUG_FRAGMENTS):
        return "nutrients"
    return None


def classify(
    slug: str,
    *,
    plant_category: Any = None,
    tcm_category: Any = None,
    systems: Iterable[str] = (),
) -> str:
    """Pick exactly one display category.

    Precedence: the plant's own ``category``, the TCM ``hasCategory``, slug
    heuristics, the first owning system, then :data:`DEFAULT_CATEGORY`.
    """
    explicit = category_from_reference(plant_category)
    if explicit:
        return explicit
    if tcm_category is not None:
        return category_from_reference(tcm_category) or "chinese-herbs"
    heuristic = category_from_slug(slug)
    if heuristic:
        return heuristic
    for system in systems:
        if system in SYSTEM_CATEGORY:
            return SYSTEM_CATEGORY[system]
    return DEFAULT_CATEGORY
