"""Reference vocabulary (nature, flavor, meridian, ...) loaded into a concept graph."""

from .graph import Concept, ConceptGraph, DanglingRelation

__all__ = ["Concept", "ConceptGraph", "DanglingRelation"]
