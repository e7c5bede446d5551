"""Best-effort linking of corpus documents to external taxonomy records."""

from __future__ import annotations

import copy
from typing import Any, Iterable, Protocol

from herbapedia_tools.core.config import Settings, get_settings
from herbapedia_tools.core.exceptions import ExternalServiceError
from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import ExternalMatch, LinkResult
from herbapedia_tools.core.uris import iter_references, normalize_url, same_as_urls

from .rate_limit import RateLimiter

LOGGER = get_logger(__name__)


class LinkTarget(Protocol):
    service: str
    domain: str
    id_property: str
    has_fallback: bool

    def lookup(self, name: str) -> list[ExternalMatch]: ...

    def fallback(self, names: list[str]) -> list[ExternalMatch]: ...

    def bind_limiter(self, limiter: RateLimiter) -> None: ...

    def url_for(self, external_id: str) -> str: ...

    def id_value(self, external_id: str) -> Any: ...

    def close(self) -> None: ...


def has_link(document: dict[str, Any], domain: str) -> bool:
    return any(domain in url for url in same_as_urls(document))


def merge_same_as(document: dict[str, Any], url: str) -> bool:
    """Append ``{"@id": url}`` unless an equivalent URL is present; ``sameAs`` always ends up a list."""
    links = iter_references(document.get("sameAs"))
    existing = {normalize_url(item) for item in same_as_urls(document)}
    document["sameAs"] = links
    if normalize_url(url) in existing:
        return False
    links.append({"@id": url})
    return True


def _unique_names(names: Iterable[str | None]) -> list[str]:
    ordered: list[str] = []
    for name in names:
        text = (name or "").strip() if isinstance(name, str) else ""
        if text and text not in ordered:
            ordered.append(text)
    return ordered


class ExternalLinker:
    """Try candidate names against one target until a match is accepted."""

    def __init__(
        self,
        target: LinkTarget,
        settings: Settings | None = None,
        *,
        limiter: RateLimiter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._target = target
        self._limiter = limiter or RateLimiter(self._settings.rate_limit_delay)
        self._target.bind_limiter(self._limiter)
        self._threshold = self._settings.confidence_threshold

    @property
    def target(self) -> LinkTarget:
        return self._target

    def accepts(self, match: ExternalMatch) -> bool:
        return match.confidence is None or match.confidence >= self._threshold

    def link(self, document: dict[str, Any], candidate_names: Iterable[str | None]) -> LinkResult:
        """Resolve ``document`` without modifying it; see :meth:`apply` for write-back."""
        if has_link(document, self._target.domain):
            return LinkResult(status="already_linked")
        names = _unique_names(candidate_names)
        errors = 0
        best_low: ExternalMatch | None = None
        for name in names:
            matches, failed = self._call(self._target.lookup, name)
            errors += failed
            for match in matches:
                if self.accepts(match):
                    return self._linked(match, names, errors, method="lookup")
                if best_low is None or (match.confidence or 0) > (best_low.confidence or 0):
                    best_low = match
                LOGGER.info(
                    "linker.low_confidence",
                    service=self._target.service,
                    name=name,
                    confidence=match.confidence,
                )
        if names and self._target.has_fallback:
            matches, failed = self._call(self._target.fallback, names)
            errors += failed
            for match in matches:
                if self.accepts(match):
                    return self._linked(match, names, errors, method="fallback")
        if best_low is not None:
            return LinkResult(
                status="low_confidence",
                confidence=best_low.confidence,
                matched_name=best_low.matched_name,
                best=best_low,
                searched=names,
                service_errors=errors,
            )
        return LinkResult(status="not_found", searched=names, service_errors=errors)

    def apply(self, document: dict[str, Any], result: LinkResult) -> dict[str, Any]:
        """Return a copy of ``document`` carrying the accepted link."""
        updated = copy.deepcopy(document)
        if result.status != "linked" or not result.external_id or not result.url:
            return updated
        merge_same_as(updated, result.url)
        updated[self._target.id_property] = self._target.id_value(result.external_id)
        return updated

    def close(self) -> None:
        self._target.close()

    def __enter__(self) -> "ExternalLinker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _call(self, func, argument) -> tuple[list[ExternalMatch], int]:
        self._limiter.wait()
        LOGGER.debug("linker.lookup", service=self._target.service, argument=argument)
        try:
            return func(argument), 0
        except ExternalServiceError as exc:
            LOGGER.warning("linker.service_error", service=exc.service, argument=argument, error=str(exc))
            return [], 1

    def _linked(self, match: ExternalMatch, names: list[str], errors: int, *, method: str) -> LinkResult:
        LOGGER.info(
            "linker.linked",
            service=self._target.service,
            external_id=match.external_id,
            confidence=match.confidence,
            method=method,
        )
        return LinkResult(
            status="linked",
            external_id=match.external_id,
            url=self._target.url_for(match.external_id),
            confidence=match.confidence,
            matched_name=match.matched_name,
            best=match,
            searched=names,
            service_errors=errors,
            method=method,
        )
