"""Shared argument handling and I/O helpers for the corpus maintenance CLIs."""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from herbapedia_tools.core.config import Settings, get_settings
from herbapedia_tools.core.exceptions import DocumentParseError
from herbapedia_tools.core.json_utils import dump_document, dump_json, load_document
from herbapedia_tools.core.logging import configure_logging
from herbapedia_tools.core.models import CorpusFile, DocumentRole, LinkResult, RunOptions

ROLE_CHOICES: dict[str, DocumentRole] = {
    "plant": DocumentRole.PLANT,
    "tcm": DocumentRole.TCM_PROFILE,
    "ayurveda": DocumentRole.AYURVEDA_PROFILE,
    "western": DocumentRole.WESTERN_PROFILE,
    "reference": DocumentRole.REFERENCE_DATASET,
}


def add_corpus_arguments(parser: argparse.ArgumentParser, *, dry_run: bool = True) -> None:
    parser.add_argument(
        "--data-root",
        type=Path,
        help="Root of the JSON-LD corpus (defaults to HERBAPEDIA_DATA_ROOT or the current directory).",
    )
    parser.add_argument("--slug", help="Only process the document(s) with this slug.")
    parser.add_argument(
        "--report",
        type=Path,
        help="Optional path for a JSON report of this run.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print per-document detail and debug logs.")
    if dry_run:
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing any file.",
        )


def add_role_argument(parser: argparse.ArgumentParser, *, choices: Iterable[str] | None = None) -> None:
    parser.add_argument(
        "--role",
        action="append",
        choices=list(choices or ROLE_CHOICES),
        help="Restrict to a document role; repeat to select several.",
    )


def selected_roles(args: argparse.Namespace, default: Iterable[DocumentRole]) -> set[DocumentRole]:
    names = getattr(args, "role", None)
    if not names:
        return set(default)
    return {ROLE_CHOICES[name] for name in names}


def resolve_settings(args: argparse.Namespace, **updates: Any) -> Settings:
    """Apply CLI overrides on top of the cached settings and configure logging."""
    settings = get_settings()
    if getattr(args, "data_root", None):
        updates["data_root"] = args.data_root
    updates = {key: value for key, value in updates.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    if not Path(settings.data_root).is_dir():
        raise SystemExit(f"Data root not found: {settings.data_root}")
    configure_logging("DEBUG" if getattr(args, "verbose", False) else None, settings=settings)
    return settings


def run_options(args: argparse.Namespace) -> RunOptions:
    return RunOptions(dry_run=bool(getattr(args, "dry_run", False)), verbose=bool(getattr(args, "verbose", False)))


def relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def load_entry(entry: CorpusFile, prefix: str, failures: list[str]) -> dict[str, Any] | None:
    """Load one corpus file; parse failures are printed, collected and skipped."""
    try:
        return load_document(entry.path)
    except DocumentParseError as exc:
        print(f"[{prefix}][error] {exc}")
        failures.append(str(entry.path))
        return None


def write_back(document: dict[str, Any], path: Path, options: RunOptions) -> bool:
    if options.dry_run:
        return False
    dump_document(document, path)
    return True


def write_report(payload: Any, path: Path | None, prefix: str) -> None:
    if path is None:
        return
    dump_json(payload, path)
    print(f"[{prefix}] Report written to {path}")


def mode_label(options: RunOptions) -> str:
    return ":dry-run" if options.dry_run else ""


@dataclass(slots=True)
class LinkSummary:
    """Tallies outcomes of a linking run for the console and JSON reports."""

    counts: Counter = field(default_factory=Counter)
    entries: list[dict[str, Any]] = field(default_factory=list)
    service_errors: int = 0

    def record(self, slug: str, status: str, **detail: Any) -> None:
        self.counts[status] += 1
        self.entries.append({"slug": slug, "status": status, **detail})

    def record_result(self, slug: str, result: LinkResult) -> None:
        self.service_errors += result.service_errors
        detail: dict[str, Any] = {}
        if result.status == "linked":
            detail = {"externalId": result.external_id, "url": result.url, "confidence": result.confidence}
        elif result.status == "low_confidence":
            detail = {"matchedName": result.matched_name, "confidence": result.confidence}
        elif result.status == "not_found":
            detail = {"searched": result.searched}
        self.record(slug, result.status, **detail)

    def print_summary(self, prefix: str, total: int) -> None:
        ordered = ("linked", "already_linked", "low_confidence", "not_found")
        parts = [f"{self.counts.get(status, 0)} {status}" for status in ordered]
        parts += [f"{count} skipped ({status})" for status, count in sorted(self.counts.items()) if status not in ordered]
        print(f"[{prefix}] {total} documents: {', '.join(parts)}")
        if self.service_errors:
            print(f"[{prefix}] {self.service_errors} service errors (timeouts, HTTP or network failures)")

    def as_dict(self) -> dict[str, Any]:
        return {"counts": dict(self.counts), "serviceErrors": self.service_errors, "documents": self.entries}


def add_link_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds between external requests (must be greater than zero).",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        help="Minimum match confidence to accept (0-100).",
    )
    parser.add_argument("--limit", type=int, help="Stop after this many documents.")


def link_overrides(args: argparse.Namespace) -> dict[str, Any]:
    if args.delay is not None and args.delay <= 0:
        raise SystemExit("--delay must be greater than zero")
    if args.threshold is not None and not 0 <= args.threshold <= 100:
        raise SystemExit("--threshold must be between 0 and 100")
    return {"rate_limit_delay": args.delay, "confidence_threshold": args.threshold}
