"""Custom exception hierarchy for the data tooling."""

from __future__ import annotations

from pathlib import Path


class HerbapediaError(Exception):
    """Base error for the Herbapedia data tooling."""


class ConfigurationError(HerbapediaError):
    """Raised when settings or command options are inconsistent."""


class DocumentParseError(HerbapediaError):
    """Raised when a corpus document is not a well-formed JSON object."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = Path(path)
        self.reason = message


class ExternalServiceError(HerbapediaError):
    """Raised by service clients on timeouts, non-2xx responses or bad payloads."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service


class IndexBuildError(HerbapediaError):
    """Raised when generated index artifacts do not satisfy their schema."""
