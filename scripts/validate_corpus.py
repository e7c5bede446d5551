#!/usr/bin/env python
"""Validate plant entities, system profiles and reference datasets in the corpus."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.validation import ValidationReport, ValidationService  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    ROLE_CHOICES,
    add_corpus_arguments,
    add_role_argument,
    relative,
    resolve_settings,
    selected_roles,
    write_report,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_corpus_arguments(parser, dry_run=False)
    add_role_argument(parser)
    parser.add_argument(
        "--warnings",
        action="store_true",
        help="Also list warnings for documents that have no errors.",
    )
    return parser.parse_args(argv)


def print_report(report: ValidationReport, *, show_warnings: bool, verbose: bool) -> None:
    for result in report.results:
        if result.valid and not (show_warnings and result.warnings):
            if verbose:
                print(f"[ok] {relative(result.path, report.root)}")
            continue
        status = "fail" if not result.valid else "warn"
        print(f"[{status}] {relative(result.path, report.root)}")
        for finding in result.errors:
            print(f"    error   {finding.kind.value:<20} {finding.field}: {finding.message}")
        if show_warnings or verbose:
            for finding in result.warnings:
                hint = f" (use {finding.suggestion})" if finding.suggestion else ""
                print(f"    warning {finding.kind.value:<20} {finding.field}: {finding.message}{hint}")

    print(
        f"[validate] {len(report.results)} documents: {report.passed} passed, {report.failed} failed, "
        f"{report.error_count} errors, {report.warning_count} warnings"
    )
    for role, counts in sorted(report.by_role().items()):
        print(f"[validate]   {role}: {counts['passed']} passed, {counts['failed']} failed")
    missing = report.missing_languages()
    if missing:
        summary = ", ".join(f"{tag}={count}" for tag, count in missing.items())
        print(f"[validate] Missing translations: {summary}")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    roles = selected_roles(args, ROLE_CHOICES.values())
    service = ValidationService(settings)
    report = service.validate_corpus(settings.data_root, roles, slug=args.slug)
    if not report.results:
        print(f"[validate] No documents found under {settings.data_root}")
    print_report(report, show_warnings=args.warnings, verbose=args.verbose)
    write_report(report.as_dict(), args.report, "validate")
    return report.exit_code


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
