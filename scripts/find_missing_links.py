#!/usr/bin/env python
"""List documents that carry no ``sameAs`` cross-reference to GBIF or Wikidata."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.core.models import DocumentRole  # noqa: E402
from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.linking import has_link  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    add_corpus_arguments,
    add_role_argument,
    load_entry,
    relative,
    resolve_settings,
    selected_roles,
    write_report,
)

SERVICE_DOMAINS = {"gbif": "gbif.org", "wikidata": "wikidata.org"}
DEFAULT_ROLES = {"gbif": (DocumentRole.PLANT,), "wikidata": (DocumentRole.TCM_PROFILE,)}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_corpus_arguments(parser, dry_run=False)
    add_role_argument(parser, choices=("plant", "tcm", "ayurveda", "western"))
    parser.add_argument(
        "--service",
        choices=sorted(SERVICE_DOMAINS),
        default="wikidata",
        help="Which cross-reference to look for (default: wikidata).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    domain = SERVICE_DOMAINS[args.service]
    roles = selected_roles(args, DEFAULT_ROLES[args.service])
    entries = find_documents(settings.data_root, roles, slug=args.slug, suffixes=tuple(settings.document_suffixes))

    failures: list[str] = []
    missing: list[dict[str, str]] = []
    for entry in entries:
        document = load_entry(entry, "missing", failures)
        if document is None:
            continue
        if has_link(document, domain):
            continue
        missing.append({"slug": entry.slug, "role": entry.role.value, "path": relative(entry.path, settings.data_root)})
        print(f"[missing] {entry.role.value} {entry.slug}")

    print(f"[missing] {len(missing)} of {len(entries)} documents have no {domain} link")
    write_report(
        {"service": args.service, "checked": len(entries), "missing": missing, "parseFailures": failures},
        args.report,
        "missing",
    )
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
