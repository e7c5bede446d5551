"""Enumerate corpus documents by role."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.models import CorpusFile, DocumentRole

LOGGER = get_logger(__name__)

SKIPPED_DIRECTORIES = frozenset({"node_modules", "dist", ".git", "schema", "context"})
DEFAULT_SUFFIXES: tuple[str, ...] = (".jsonld",)

_PROFILE_LAYOUT: dict[tuple[str, str], DocumentRole] = {
    ("tcm", "herbs"): DocumentRole.TCM_PROFILE,
    ("ayurveda", "dravyas"): DocumentRole.AYURVEDA_PROFILE,
    ("western", "herbs"): DocumentRole.WESTERN_PROFILE,
}

ROLE_DIRECTORIES: dict[DocumentRole, tuple[str, ...]] = {
    DocumentRole.PLANT: ("entities", "plants"),
    DocumentRole.TCM_PROFILE: ("systems", "tcm", "herbs"),
    DocumentRole.AYURVEDA_PROFILE: ("systems", "ayurveda", "dravyas"),
    DocumentRole.WESTERN_PROFILE: ("systems", "western", "herbs"),
}


def detect_role(path: Path, root: Path) -> DocumentRole | None:
    """Infer the document role from its position below ``root``."""
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    if any(part in SKIPPED_DIRECTORIES for part in parts[:-1]):
        return None
    name = parts[-1] if parts else ""
    if len(parts) >= 4 and parts[0] == "entities" and parts[1] == "plants":
        return DocumentRole.PLANT if name.startswith("entity.") else None
    if len(parts) >= 3 and parts[0] == "systems":
        role = _PROFILE_LAYOUT.get((parts[1], parts[2]))
        if role is not None:
            return role if len(parts) >= 5 and name.startswith("profile.") else None
        return DocumentRole.REFERENCE_DATASET
    if len(parts) >= 2 and parts[0] == "systems":
        return DocumentRole.REFERENCE_DATASET
    if parts and parts[0] == "reference":
        return DocumentRole.REFERENCE_DATASET
    return None


def slug_for(path: Path, role: DocumentRole) -> str:
    """Entities and profiles are keyed by their directory; datasets by file stem."""
    if role is DocumentRole.REFERENCE_DATASET:
        return path.stem
    return path.parent.name


def find_documents(
    root: Path,
    role: DocumentRole | Iterable[DocumentRole] | None = None,
    *,
    slug: str | None = None,
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
) -> list[CorpusFile]:
    """Return corpus documents below ``root`` in a deterministic order."""
    wanted = _normalize_roles(role)
    search_roots = _search_roots(root, wanted)
    found: list[CorpusFile] = []
    seen: set[Path] = set()
    for base in search_roots:
        for path in _walk(base, suffixes):
            if path in seen:
                continue
            seen.add(path)
            detected = detect_role(path, root)
            if detected is None or (wanted and detected not in wanted):
                continue
            entry = CorpusFile(path=path, role=detected, slug=slug_for(path, detected))
            if slug and entry.slug != slug:
                continue
            found.append(entry)
    LOGGER.debug("corpus.walk", root=str(root), roles=sorted(r.value for r in wanted), count=len(found))
    return found


def document_paths(root: Path, role: DocumentRole | None = None, *, slug: str | None = None) -> list[Path]:
    return [entry.path for entry in find_documents(root, role, slug=slug)]


def _normalize_roles(role: DocumentRole | Iterable[DocumentRole] | None) -> set[DocumentRole]:
    if role is None:
        return set()
    if isinstance(role, DocumentRole):
        return {role}
    return set(role)


def _search_roots(root: Path, wanted: set[DocumentRole]) -> list[Path]:
    if not wanted or DocumentRole.REFERENCE_DATASET in wanted:
        return [root]
    return [root.joinpath(*ROLE_DIRECTORIES[item]) for item in sorted(wanted, key=lambda r: r.value)]


def _walk(base: Path, suffixes: tuple[str, ...]) -> Iterator[Path]:
    if not base.is_dir():
        return
    for entry in sorted(base.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            if entry.name in SKIPPED_DIRECTORIES:
                continue
            yield from _walk(entry, suffixes)
        elif entry.suffix in suffixes:
            yield entry
