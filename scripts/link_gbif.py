#!/usr/bin/env python
"""Link plant entities to GBIF species records via the species-match API."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import httpx

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.core.config import Settings  # noqa: E402
from herbapedia_tools.core.models import DocumentRole  # noqa: E402
from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.linking import ExternalLinker, GbifClient, GbifTarget, has_link  # noqa: E402
from herbapedia_tools.names import normalize_scientific_name  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    LinkSummary,
    add_corpus_arguments,
    add_link_arguments,
    link_overrides,
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
    add_link_arguments(parser)
    return parser.parse_args(argv)


def build_linker(settings: Settings, http_client: httpx.Client | None = None) -> ExternalLinker:
    return ExternalLinker(GbifTarget(GbifClient(settings, client=http_client)), settings)


def main(argv: Sequence[str] | None = None, *, http_client: httpx.Client | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args, **link_overrides(args))
    options = run_options(args)
    prefix = f"gbif{mode_label(options)}"
    entries = find_documents(
        settings.data_root, DocumentRole.PLANT, slug=args.slug, suffixes=tuple(settings.document_suffixes)
    )
    if args.limit is not None:
        entries = entries[: args.limit]

    summary = LinkSummary()
    failures: list[str] = []
    with build_linker(settings, http_client) as linker:
        for entry in entries:
            document = load_entry(entry, prefix, failures)
            if document is None:
                continue
            if has_link(document, linker.target.domain):
                summary.record(entry.slug, "already_linked")
                continue
            raw = document.get("scientificName")
            name = normalize_scientific_name(raw if isinstance(raw, str) else None)
            if name.skipped:
                summary.record(entry.slug, name.reason or "skipped")
                if options.verbose:
                    print(f"[{prefix}][skip] {entry.slug}: {name.reason}")
                continue
            result = linker.link(document, name.candidates)
            summary.record_result(entry.slug, result)
            if result.status == "linked":
                write_back(linker.apply(document, result), entry.path, options)
                print(f"[{prefix}][ok] {entry.slug} -> {result.url} (confidence {result.confidence})")
            elif result.status == "low_confidence":
                print(
                    f"[{prefix}][low] {entry.slug}: best match {result.matched_name!r} "
                    f"confidence {result.confidence}"
                )
            elif options.verbose:
                print(f"[{prefix}][miss] {entry.slug}: searched {', '.join(result.searched)}")

    summary.print_summary(prefix, len(entries))
    if failures:
        print(f"[{prefix}] {len(failures)} documents could not be parsed")
    write_report({**summary.as_dict(), "parseFailures": failures}, args.report, prefix)
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
