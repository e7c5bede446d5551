"""Rule checks producing :class:`ValidationFinding` lists for a single document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from herbapedia_tools.core.constants import REQUIRED_LANGUAGES, is_non_plant_slug, scoped_field
from herbapedia_tools.core.models import DocumentRole, IssueKind, Severity, ValidationFinding
from herbapedia_tools.core.uris import classify_reference, id_prefix, iter_references, local_id, reference_id
from herbapedia_tools.corpus.language import invalid_tags, missing_languages
from herbapedia_tools.vocabulary.graph import ConceptGraph

from .rules import (
    IDENTITY_CRITICAL,
    PLANT_RECOMMENDED,
    PLANT_REFERENCE_FIELDS,
    PLANT_REQUIRED,
    PROFILE_REFERENCE_FIELDS,
    PROFILE_REQUIRED,
    content_key_owner,
    is_blank,
    lookup,
    multilingual_fields,
)


@dataclass(slots=True)
class ValidationContext:
    """Corpus-wide facts used for reference resolution.

    ``plant_ids`` holds local plant identifiers (``plant/ginseng``); ``None``
    disables plant resolution. ``graph`` holds the loaded reference concepts;
    only namespaces present in it are checked.
    """

    plant_ids: set[str] | None = None
    graph: ConceptGraph | None = None

    def plant_exists(self, identifier: str) -> bool | None:
        if self.plant_ids is None:
            return None
        return local_id(identifier) in self.plant_ids

    def concept_exists(self, identifier: str) -> bool | None:
        if self.graph is None:
            return None
        prefix = id_prefix(identifier)
        if prefix is None or prefix not in self.graph.namespaces:
            return None
        return identifier in self.graph


def _finding(
    field: str,
    kind: IssueKind,
    message: str,
    severity: Severity = "error",
    suggestion: str | None = None,
) -> ValidationFinding:
    return ValidationFinding(field=field, kind=kind, severity=severity, message=message, suggestion=suggestion)


def check_required(
    document: dict[str, Any],
    fields: Iterable[str],
    *,
    system: str | None = None,
    severity: Severity = "error",
) -> list[ValidationFinding]:
    findings: list[ValidationFinding] = []
    for field in fields:
        _, value = lookup(document, field, system)
        if is_blank(value):
            label = "required" if severity == "error" else "recommended"
            findings.append(_finding(field, IssueKind.MISSING_FIELD, f"Missing {label} field: {field}", severity))
    return findings


def check_language_map(value: Any, field: str, *, critical: bool | None = None) -> list[ValidationFinding]:
    """Shape and completeness checks for one multilingual value."""
    if value is None:
        return []
    critical = field.split(".")[-1] in IDENTITY_CRITICAL if critical is None else critical
    findings: list[ValidationFinding] = []
    if isinstance(value, str):
        findings.append(
            _finding(field, IssueKind.WRONG_SHAPE, f"{field} should be a language map, not a string", "warning")
        )
        value = {"en": value} if value.strip() else {}
    elif not isinstance(value, dict):
        return [_finding(field, IssueKind.WRONG_SHAPE, f"{field} should be a language map", "error")]
    else:
        bad = invalid_tags(value)
        if bad:
            findings.append(
                _finding(
                    field,
                    IssueKind.WRONG_SHAPE,
                    f"{field} uses keys that are not language tags: {', '.join(sorted(bad))}",
                    "warning",
                )
            )
    severity: Severity = "error" if critical else "warning"
    for tag in missing_languages(value, REQUIRED_LANGUAGES):
        findings.append(
            _finding(f"{field}.{tag}", IssueKind.MISSING_TRANSLATION, f"Missing {tag} translation", severity)
        )
    return findings


def check_plant_scope(document: dict[str, Any]) -> list[ValidationFinding]:
    findings: list[ValidationFinding] = []
    for key in document:
        owner = content_key_owner(key)
        if owner is None:
            continue
        findings.append(
            _finding(
                key,
                IssueKind.SCOPE_VIOLATION,
                f"Plant entity must not contain system-scoped content: {key}. Move it to a system profile.",
            )
        )
    return findings


def check_profile_scope(document: dict[str, Any], system: str) -> list[ValidationFinding]:
    findings: list[ValidationFinding] = []
    for key in document:
        owner = content_key_owner(key)
        if owner is None:
            continue
        owner_system, topic = owner
        if owner_system is None:
            preferred = scoped_field(system, topic)
            findings.append(
                _finding(
                    key,
                    IssueKind.SCOPE_VIOLATION,
                    f"Use {preferred} instead of generic {key} for system-scoped content",
                    "warning",
                    suggestion=preferred,
                )
            )
        elif owner_system != system:
            findings.append(
                _finding(
                    key,
                    IssueKind.SCOPE_VIOLATION,
                    f"{key} belongs to the {owner_system} system, not {system}",
                    "warning",
                    suggestion=scoped_field(system, topic),
                )
            )
    return findings


def check_references(
    document: dict[str, Any],
    fields: Iterable[str],
    context: ValidationContext | None,
    *,
    system: str | None = None,
) -> list[ValidationFinding]:
    """Resolve well-formed references against the loaded corpus; unknown formats pass."""
    if context is None:
        return []
    findings: list[ValidationFinding] = []
    for field in fields:
        _, value = lookup(document, field, system)
        for item in iter_references(value):
            if classify_reference(item) == "unknown":
                continue
            identifier = reference_id(item)
            if identifier is None:
                continue
            if context.concept_exists(identifier) is False:
                findings.append(
                    _finding(
                        field,
                        IssueKind.UNRESOLVED_REFERENCE,
                        f"{field} references unknown concept {identifier}",
                        "warning",
                    )
                )
    return findings


def validate_plant(
    document: dict[str, Any],
    *,
    slug: str | None = None,
    context: ValidationContext | None = None,
) -> list[ValidationFinding]:
    key = slug or document.get("@id") or ""
    required = PLANT_REQUIRED if not is_non_plant_slug(str(key)) else tuple(
        field for field in PLANT_REQUIRED if field != "scientificName"
    )
    findings = check_required(document, required)
    findings += check_required(document, PLANT_RECOMMENDED, severity="warning")
    types = document.get("@type")
    if not is_blank(types) and not isinstance(types, list):
        findings.append(_finding("@type", IssueKind.WRONG_SHAPE, "@type should be an array", "warning"))
    for field in multilingual_fields(DocumentRole.PLANT):
        _, value = lookup(document, field)
        findings += check_language_map(value, field)
    findings += check_plant_scope(document)
    findings += check_references(document, PLANT_REFERENCE_FIELDS, context)
    return findings


def validate_profile(
    document: dict[str, Any],
    system: str,
    *,
    context: ValidationContext | None = None,
) -> list[ValidationFinding]:
    findings = check_required(document, PROFILE_REQUIRED.get(system, ("@id", "@type")), system=system)
    if system == "tcm":
        types = [item for item in iter_references(document.get("@type")) if isinstance(item, str)]
        if types and not any("Herb" in item for item in types):
            findings.append(_finding("@type", IssueKind.WRONG_SHAPE, "@type should include tcm:Herb", "warning"))
    role = DocumentRole(f"{system}-profile")
    for field in multilingual_fields(role):
        _, value = lookup(document, field, system)
        findings += check_language_map(value, field)
    findings += check_profile_scope(document, system)
    findings += _check_plant_link(document, system, context)
    findings += check_references(document, PROFILE_REFERENCE_FIELDS.get(system, ()), context, system=system)
    return findings


def _check_plant_link(
    document: dict[str, Any],
    system: str,
    context: ValidationContext | None,
) -> list[ValidationFinding]:
    if context is None:
        return []
    _, value = lookup(document, "derivedFromPlant", system)
    if classify_reference(value) == "unknown":
        return []
    identifier = reference_id(value)
    if identifier is None or context.plant_exists(identifier) is not False:
        return []
    return [
        _finding(
            "derivedFromPlant",
            IssueKind.UNRESOLVED_REFERENCE,
            f"derivedFromPlant points to missing plant {identifier}",
            "warning",
        )
    ]


def validate_reference_dataset(document: dict[str, Any]) -> list[ValidationFinding]:
    graph = document.get("@graph")
    if not isinstance(graph, list):
        return [_finding("@graph", IssueKind.WRONG_SHAPE, "Missing or invalid @graph array")]
    findings: list[ValidationFinding] = []
    for position, item in enumerate(graph):
        if not isinstance(item, dict):
            findings.append(
                _finding(f"@graph[{position}]", IssueKind.WRONG_SHAPE, "Concept entries must be objects")
            )
            continue
        identifier = reference_id(item) or f"@graph[{position}]"
        if reference_id(item) is None:
            findings.append(_finding(f"{identifier}.@id", IssueKind.MISSING_FIELD, "Concept is missing @id"))
        label = item.get("prefLabel")
        if is_blank(label):
            findings.append(_finding(f"{identifier}.prefLabel", IssueKind.MISSING_FIELD, "Missing prefLabel"))
        else:
            findings += check_language_map(label, f"{identifier}.prefLabel", critical=True)
        findings += check_language_map(item.get("description"), f"{identifier}.description", critical=False)
    return findings


def validate_document(
    document: dict[str, Any],
    role: DocumentRole,
    *,
    slug: str | None = None,
    context: ValidationContext | None = None,
) -> list[ValidationFinding]:
    """Dispatch to the rule set for ``role``."""
    if role is DocumentRole.PLANT:
        return validate_plant(document, slug=slug, context=context)
    if role.is_profile and role.system:
        return validate_profile(document, role.system, context=context)
    return validate_reference_dataset(document)
