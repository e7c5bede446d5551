"""Shared data models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal


class DocumentRole(str, Enum):
    PLANT = "plant"
    TCM_PROFILE = "tcm-profile"
    AYURVEDA_PROFILE = "ayurveda-profile"
    WESTERN_PROFILE = "western-profile"
    REFERENCE_DATASET = "reference-dataset"

    @property
    def system(self) -> str | None:
        """Medicine system owning a profile role, ``None`` for other roles."""
        if self in PROFILE_ROLES:
            return self.value.removesuffix("-profile")
        return None

    @property
    def is_profile(self) -> bool:
        return self in PROFILE_ROLES


PROFILE_ROLES = frozenset(
    {DocumentRole.TCM_PROFILE, DocumentRole.AYURVEDA_PROFILE, DocumentRole.WESTERN_PROFILE}
)


class IssueKind(str, Enum):
    MISSING_FIELD = "MissingField"
    WRONG_SHAPE = "WrongShape"
    MISSING_TRANSLATION = "MissingTranslation"
    SCOPE_VIOLATION = "ScopeViolation"
    UNRESOLVED_REFERENCE = "UnresolvedReference"
    PARSE_FAILURE = "ParseFailure"
    EXTERNAL_SERVICE_FAILURE = "ExternalServiceFailure"
    LOW_CONFIDENCE_MATCH = "LowConfidenceMatch"


Severity = Literal["error", "warning"]


@dataclass(slots=True, frozen=True)
class CorpusFile:
    path: Path
    role: DocumentRole
    slug: str


@dataclass(slots=True, frozen=True)
class RunOptions:
    """Per-invocation flags threaded through script helpers."""

    dry_run: bool = False
    verbose: bool = False


@dataclass(slots=True, frozen=True)
class ValidationFinding:
    field: str
    kind: IssueKind
    severity: Severity
    message: str
    suggestion: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["kind"] = self.kind.value
        return payload


LinkStatus = Literal["linked", "low_confidence", "not_found", "already_linked"]


@dataclass(slots=True)
class ExternalMatch:
    """A candidate returned by an external matching service."""

    external_id: str
    matched_name: str
    match_kind: str | None = None
    confidence: int | None = None
    description: str | None = None


@dataclass(slots=True)
class LinkResult:
    status: LinkStatus
    external_id: str | None = None
    url: str | None = None
    confidence: int | None = None
    matched_name: str | None = None
    best: ExternalMatch | None = None
    searched: list[str] = field(default_factory=list)
    service_errors: int = 0
    method: str | None = None

    @property
    def changed(self) -> bool:
        return self.status == "linked"

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
