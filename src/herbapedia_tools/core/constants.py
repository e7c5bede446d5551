"""Shared constant values used across the Herbapedia data tooling."""

from __future__ import annotations

from typing import Final

REQUIRED_LANGUAGES: Final[tuple[str, ...]] = ("en", "zh-Hant", "zh-Hans")

SYSTEMS: Final[tuple[str, ...]] = ("tcm", "ayurveda", "western")

CONTENT_TOPICS: Final[tuple[str, ...]] = (
    "history",
    "traditionalUsage",
    "modernResearch",
    "functions",
    "classicalReference",
    "safetyConsideration",
)

# Entries stored under entities/plants that are not botanical taxa.
NON_PLANT_SLUGS: Final[tuple[str, ...]] = (
    # Minerals
    "calcium", "copper", "iodine", "iron", "magnesium", "manganese", "potassium", "selenium", "zinc",
    # Nutrients
    "capigen", "ceramides", "chitosan", "choline", "chondroitin-sulfate", "cysteine-hci",
    "epicutin-tt", "factor-arl", "glucosamine-sulfate", "glycerin", "glycine",
    "hydration-factor-cte4", "inositol", "lecithin", "linolenic-acid", "lysine",
    "melatonin", "methionine", "mineral-oil", "mpc", "paba", "petrolatum", "phospholipids",
    "saw-palmetto", "squalene",
    # Oils and animal products
    "royal-jelly", "argan-oil", "balm-mint-oil", "clove-oil", "eucalyptus-oil",
    "evening-primrose-oil", "jojoba-seed-oil", "lavender-oil", "peppermint-oil",
    "rosemary-oil", "sage-oil", "tea-tree-oil", "thyme-oil", "amber",
)

MINERAL_SLUGS: Final[tuple[str, ...]] = (
    "calcium", "copper", "iodine", "iron", "magnesium", "manganese", "potassium", "selenium", "zinc",
)

NUTRIENT_SLUG_FRAGMENTS: Final[tuple[str, ...]] = (
    "choline", "chondroitin", "glucosamine", "inositol", "lecithin", "lysine", "melatonin", "methionine",
)

INDEX_VERSION: Final[str] = "1.0"


def is_non_plant_slug(slug: str) -> bool:
    """True for vitamins, minerals, nutrients and oils kept alongside the plants."""
    return any(token in slug for token in NON_PLANT_SLUGS) or "vitamin-" in slug or "omega" in slug


def scoped_field(system: str, topic: str) -> str:
    """``scoped_field("tcm", "traditionalUsage") -> "tcmTraditionalUsage"``."""
    return f"{system}{topic[0].upper()}{topic[1:]}"
