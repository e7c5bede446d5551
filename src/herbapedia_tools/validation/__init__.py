"""Structural validation of plants, system profiles and reference datasets."""

from .service import DocumentResult, ValidationReport, ValidationService, validate_corpus
from .validators import ValidationContext, validate_document

__all__ = [
    "DocumentResult",
    "ValidationReport",
    "ValidationService",
    "ValidationContext",
    "validate_corpus",
    "validate_document",
]
