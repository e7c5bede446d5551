"""Translation back-filling for language maps."""

from .charmap import to_simplified
from .filler import PLACEHOLDER_MARKER, FillChange, fill_translations, is_placeholder
from .glossary import lookup_term

__all__ = [
    "PLACEHOLDER_MARKER",
    "FillChange",
    "fill_translations",
    "is_placeholder",
    "lookup_term",
    "to_simplified",
]
