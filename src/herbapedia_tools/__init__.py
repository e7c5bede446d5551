"""Validation and enrichment tooling for the Herbapedia medicinal-plant knowledge base."""

__version__ = "0.1.0"
