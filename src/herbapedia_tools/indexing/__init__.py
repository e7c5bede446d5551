"""Aggregate index generation for the presentation layer."""

from .builder import IndexBuilder, IndexBuildResult
from .categories import CATEGORIES, classify
from .schema import artifact_errors, validate_artifact

__all__ = [
    "IndexBuilder",
    "IndexBuildResult",
    "CATEGORIES",
    "classify",
    "artifact_errors",
    "validate_artifact",
]
