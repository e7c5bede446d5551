"""Shared core utilities for the Herbapedia data tooling."""

from .config import Settings, get_settings
from .exceptions import (
    ConfigurationError,
    DocumentParseError,
    ExternalServiceError,
    HerbapediaError,
    IndexBuildError,
)
from .logging import configure_logging
from .models import (
    CorpusFile,
    DocumentRole,
    ExternalMatch,
    IssueKind,
    LinkResult,
    RunOptions,
    ValidationFinding,
)

__all__ = [
    "Settings",
    "RunOptions",
    "CorpusFile",
    "DocumentRole",
    "IssueKind",
    "ValidationFinding",
    "ExternalMatch",
    "LinkResult",
    "HerbapediaError",
    "ConfigurationError",
    "DocumentParseError",
    "ExternalServiceError",
    "IndexBuildError",
    "get_settings",
    "configure_logging",
]
