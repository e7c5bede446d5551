"""Corpus discovery, typed document records and language-map helpers."""

from .documents import CorpusDocument, PlantDocument, ProfileDocument, ReferenceDataset, parse_record
from .language import has_text, is_language_map, missing_languages, preferred_text
from .walker import detect_role, document_paths, find_documents

__all__ = [
    "CorpusDocument",
    "PlantDocument",
    "ProfileDocument",
    "ReferenceDataset",
    "parse_record",
    "has_text",
    "is_language_map",
    "missing_languages",
    "preferred_text",
    "detect_role",
    "document_paths",
    "find_documents",
]
