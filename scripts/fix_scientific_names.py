#!/usr/bin/env python
"""Rewrite plant ``scientificName`` values to their cleaned, lookup-ready form."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.core.models import DocumentRole  # noqa: E402
from herbapedia_tools.names import normalize_scientific_name  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    add_corpus_arguments,
    load_entry,
    mode_label,
    resolve_settings,
    run_options,
    write_back,
    write_report,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_corpus_arguments(parser)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    options = run_options(args)
    prefix = f"names{mode_label(options)}"
    entries = find_documents(
        settings.data_root, DocumentRole.PLANT, slug=args.slug, suffixes=tuple(settings.document_suffixes)
    )
    failures: list[str] = []
    fixed: list[dict[str, str]] = []
    skipped: list[dict[str, str]] = []
    unchanged = 0
    for entry in entries:
        document = load_entry(entry, prefix, failures)
        if document is None:
            continue
        raw = document.get("scientificName")
        result = normalize_scientific_name(raw if isinstance(raw, str) else None)
        if result.skipped:
            skipped.append({"slug": entry.slug, "reason": result.reason or ""})
            if options.verbose:
                print(f"[{prefix}][skip] {entry.slug}: {result.reason}")
            continue
        if not result.changed:
            unchanged += 1
            continue
        document["scientificName"] = result.cleaned
        write_back(document, entry.path, options)
        fixed.append({"slug": entry.slug, "from": result.raw, "to": result.cleaned})
        print(f"[{prefix}][fix] {entry.slug}: {result.raw!r} -> {result.cleaned!r}")

    print(
        f"[{prefix}] {len(entries)} plants: {len(fixed)} fixed, {unchanged} unchanged, "
        f"{len(skipped)} skipped, {len(failures)} unreadable"
    )
    write_report(
        {"fixed": fixed, "skipped": skipped, "unchanged": unchanged, "parseFailures": failures},
        args.report,
        prefix,
    )
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
