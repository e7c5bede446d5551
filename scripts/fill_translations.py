#!/usr/bin/env python
"""Back-fill missing English and Chinese values in multilingual fields.

Simplified Chinese is derived from Traditional Chinese, Traditional is copied
from Simplified, and anything else gets a marked placeholder that
``--list-placeholders`` can find later.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.translation import fill_translations, is_placeholder  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    ROLE_CHOICES,
    add_corpus_arguments,
    add_role_argument,
    load_entry,
    mode_label,
    relative,
    resolve_settings,
    run_options,
    selected_roles,
    write_back,
    write_report,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    add_corpus_arguments(parser)
    add_role_argument(parser)
    parser.add_argument(
        "--list-placeholders",
        action="store_true",
        help="Only list values still holding a translation placeholder; writes nothing.",
    )
    return parser.parse_args(argv)


def placeholder_paths(value: Any, path: str = "") -> list[str]:
    if isinstance(value, dict):
        found: list[str] = []
        for key, item in value.items():
            found += placeholder_paths(item, f"{path}.{key}" if path else str(key))
        return found
    if isinstance(value, list):
        found = []
        for position, item in enumerate(value):
            found += placeholder_paths(item, f"{path}[{position}]")
        return found
    return [path] if is_placeholder(value) else []


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    options = run_options(args)
    prefix = f"translate{mode_label(options)}"
    roles = selected_roles(args, ROLE_CHOICES.values())
    entries = find_documents(settings.data_root, roles, slug=args.slug, suffixes=tuple(settings.document_suffixes))
    failures: list[str] = []

    if args.list_placeholders:
        listed: dict[str, list[str]] = {}
        for entry in entries:
            document = load_entry(entry, "translate", failures)
            if document is None:
                continue
            paths = placeholder_paths(document)
            if paths:
                listed[relative(entry.path, settings.data_root)] = paths
                for path in paths:
                    print(f"[placeholder] {relative(entry.path, settings.data_root)}: {path}")
        total = sum(len(paths) for paths in listed.values())
        print(f"[translate] {total} placeholders in {len(listed)} of {len(entries)} documents")
        write_report({"placeholders": listed, "parseFailures": failures}, args.report, "translate")
        return 1 if failures else 0

    actions: Counter[str] = Counter()
    changed: list[dict[str, Any]] = []
    for entry in entries:
        document = load_entry(entry, prefix, failures)
        if document is None:
            continue
        updated, changes = fill_translations(document, entry.role, entry.slug)
        if not changes:
            continue
        write_back(updated, entry.path, options)
        actions.update(change.action for change in changes)
        changed.append(
            {
                "path": relative(entry.path, settings.data_root),
                "changes": [change.as_dict() for change in changes],
            }
        )
        print(f"[{prefix}][fill] {relative(entry.path, settings.data_root)}: {len(changes)} values")
        if options.verbose:
            for change in changes:
                print(f"    {change.action:<11} {change.field}.{change.language}")

    breakdown = ", ".join(f"{count} {action}" for action, count in sorted(actions.items())) or "nothing to add"
    print(f"[{prefix}] {len(changed)} of {len(entries)} documents updated ({breakdown})")
    write_report(
        {"updated": changed, "actions": dict(actions), "parseFailures": failures},
        args.report,
        prefix,
    )
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
