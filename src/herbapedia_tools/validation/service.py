"""Corpus-level validation facade and report aggregation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from herbapedia_tools.core.config import Settings, get_settings
from herbapedia_tools.core.exceptions import DocumentParseError
from herbapedia_tools.core.json_utils import load_document
from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import CorpusFile, DocumentRole, IssueKind, ValidationFinding
from herbapedia_tools.core.uris import local_id
from herbapedia_tools.corpus.documents import ReferenceDataset
from herbapedia_tools.corpus.walker import find_documents
from herbapedia_tools.vocabulary.graph import ConceptGraph

from .validators import ValidationContext, validate_document

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class DocumentResult:
    path: Path
    role: DocumentRole
    slug: str
    findings: list[ValidationFinding] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationFinding]:
        return [item for item in self.findings if item.is_error]

    @property
    def warnings(self) -> list[ValidationFinding]:
        return [item for item in self.findings if not item.is_error]

    @property
    def valid(self) -> bool:
        return not self.errors

    def as_dict(self, root: Path | None = None) -> dict[str, Any]:
        path = self.path.relative_to(root) if root and self.path.is_relative_to(root) else self.path
        return {
            "path": str(path),
            "role": self.role.value,
            "slug": self.slug,
            "valid": self.valid,
            "errors": [item.as_dict() for item in self.errors],
            "warnings": [item.as_dict() for item in self.warnings],
        }


@dataclass(slots=True)
class ValidationReport:
    root: Path
    results: list[DocumentResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for item in self.results if item.valid)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    @property
    def error_count(self) -> int:
        return sum(len(item.errors) for item in self.results)

    @property
    def warning_count(self) -> int:
        return sum(len(item.warnings) for item in self.results)

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def by_role(self) -> dict[str, dict[str, int]]:
        counts: dict[str, dict[str, int]] = {}
        for item in self.results:
            bucket = counts.setdefault(item.role.value, {"passed": 0, "failed": 0})
            bucket["passed" if item.valid else "failed"] += 1
        return counts

    def missing_languages(self) -> dict[str, int]:
        counter: Counter[str] = Counter()
        for item in self.results:
            for finding in item.findings:
                if finding.kind is IssueKind.MISSING_TRANSLATION:
                    counter[finding.field.rsplit(".", 1)[-1]] += 1
        return dict(sorted(counter.items()))

    def by_kind(self) -> dict[str, int]:
        counter: Counter[str] = Counter()
        for item in self.results:
            counter.update(finding.kind.value for finding in item.findings)
        return dict(sorted(counter.items()))

    def as_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "totalFiles": len(self.results),
                "validFiles": self.passed,
                "invalidFiles": self.failed,
                "errors": self.error_count,
                "warnings": self.warning_count,
            },
            "byRole": self.by_role(),
            "byKind": self.by_kind(),
            "missingLanguages": self.missing_languages(),
            "files": [item.as_dict(self.root) for item in self.results],
        }


class ValidationService:
    """Validate single documents or a whole corpus directory."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def validate_document(
        self,
        payload: dict[str, Any],
        role: DocumentRole,
        context: ValidationContext | None = None,
        *,
        slug: str | None = None,
    ) -> list[ValidationFinding]:
        return validate_document(payload, role, slug=slug, context=context)

    def build_context(self, root: Path) -> ValidationContext:
        """Collect plant identifiers and reference concepts found below ``root``."""
        suffixes = tuple(self._settings.document_suffixes)
        plant_ids: set[str] = set()
        for entry in find_documents(root, DocumentRole.PLANT, suffixes=suffixes):
            plant_ids.add(f"plant/{entry.slug}")
            try:
                payload = load_document(entry.path)
            except DocumentParseError:
                continue
            identifier = payload.get("@id")
            if isinstance(identifier, str) and identifier.strip():
                plant_ids.add(local_id(identifier))
        datasets: list[ReferenceDataset] = []
        for entry in find_documents(root, DocumentRole.REFERENCE_DATASET, suffixes=suffixes):
            try:
                payload = load_document(entry.path)
            except DocumentParseError:
                continue
            datasets.append(ReferenceDataset.from_payload(payload, entry.slug))
        return ValidationContext(plant_ids=plant_ids, graph=ConceptGraph.from_datasets(datasets))

    def validate_corpus(
        self,
        root: Path | None = None,
        roles: DocumentRole | Iterable[DocumentRole] | None = None,
        *,
        slug: str | None = None,
        context: ValidationContext | None = None,
    ) -> ValidationReport:
        root = Path(root or self._settings.data_root)
        files = find_documents(root, roles, slug=slug, suffixes=tuple(self._settings.document_suffixes))
        LOGGER.info("validation.start", root=str(root), documents=len(files))
        context = context if context is not None else self.build_context(root)
        report = ValidationReport(root=root)
        for entry in files:
            report.results.append(self._validate_file(entry, context))
        LOGGER.info(
            "validation.complete",
            passed=report.passed,
            failed=report.failed,
            errors=report.error_count,
            warnings=report.warning_count,
        )
        return report

    def _validate_file(self, entry: CorpusFile, context: ValidationContext) -> DocumentResult:
        result = DocumentResult(path=entry.path, role=entry.role, slug=entry.slug)
        try:
            payload = load_document(entry.path)
        except DocumentParseError as exc:
            LOGGER.warning("validation.parse_failed", path=str(entry.path), reason=exc.reason)
            result.findings.append(
                ValidationFinding(
                    field="parse",
                    kind=IssueKind.PARSE_FAILURE,
                    severity="error",
                    message=exc.reason,
                )
            )
            return result
        result.findings = self.validate_document(payload, entry.role, context, slug=entry.slug)
        if not result.valid:
            LOGGER.debug(
                "validation.document_failed",
                path=str(entry.path),
                errors=[item.field for item in result.errors],
            )
        return result


def validate_corpus(root: Path, roles: DocumentRole | Iterable[DocumentRole] | None = None) -> ValidationReport:
    return ValidationService().validate_corpus(root, roles)
