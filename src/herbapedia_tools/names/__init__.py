"""Scientific-name normalisation."""

from .normalizer import NormalizedName, normalize_scientific_name

__all__ = ["NormalizedName", "normalize_scientific_name"]
