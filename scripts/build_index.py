#!/usr/bin/env python
"""Generate the merged herb index and its plant, profile and category views."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.core.exceptions import IndexBuildError  # noqa: E402
from herbapedia_tools.indexing import IndexBuilder  # noqa: E402
from scripts._corpus_common import (  # noqa: E402
    add_corpus_arguments,
    mode_label,
    resolve_settings,
    run_options,
    write_report,
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    add_corpus_arguments(parser)
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for index.json, plants.json, profiles.json and categories.json.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.slug:
        raise SystemExit("--slug is not supported when building the index")
    settings = resolve_settings(args, output_dir=args.output_dir)
    options = run_options(args)
    prefix = f"index{mode_label(options)}"
    builder = IndexBuilder(settings)
    result = builder.build(settings.data_root)

    counts = result.index_document()["counts"]
    herbs = counts["herbs"]
    print(
        f"[{prefix}] {counts['plants']} plants, {len(result.profiles)} profiles, "
        f"{counts['total']} entries ({herbs} herb, {counts['total'] - herbs} plant)"
    )
    for slug, count in counts["categories"].items():
        if count or options.verbose:
            print(f"[{prefix}]   {slug}: {count}")
    for orphan in result.orphans:
        print(
            f"[{prefix}][orphan] {orphan['system']} {orphan['slug']}: "
            f"{orphan['reason']} derivedFromPlant {orphan['derivedFromPlant']!r}"
        )
    if result.duplicates:
        print(f"[{prefix}] Skipped {len(result.duplicates)} duplicate documents: {', '.join(result.duplicates)}")
    for path in result.parse_failures:
        print(f"[{prefix}][error] Could not parse {path}")

    if options.dry_run:
        print(f"[{prefix}] Dry run: nothing written")
    else:
        try:
            written = builder.write(result, settings.output_dir)
        except IndexBuildError as exc:
            print(f"[{prefix}][error] {exc}")
            return 1
        print(f"[{prefix}] Wrote {', '.join(str(path) for path in written)}")

    write_report(
        {**result.reference_report(), "duplicates": result.duplicates, "parseFailures": result.parse_failures},
        args.report,
        prefix,
    )
    return 1 if result.parse_failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
