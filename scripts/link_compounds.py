#!/usr/bin/env python
"""Attach curated ``containsChemical`` references to well-studied plants."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.core.models import CorpusFile, DocumentRole  # noqa: E402
from herbapedia_tools.core.uris import id_prefix, reference_id  # noqa: E402
from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.linking.compounds import (  # noqa: E402
    COMPOUND_MAP,
    extend_chemical_dataset,
    link_compounds,
    missing_compounds,
)
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
    parser.add_argument(
        "--extend-chemicals",
        action="store_true",
        help="Add curated compound concepts missing from the chemical reference dataset.",
    )
    return parser.parse_args(argv)


def chemical_datasets(
    entries: list[CorpusFile],
    prefix: str,
    failures: list[str],
) -> list[tuple[CorpusFile, dict[str, Any], set[str]]]:
    """Reference datasets that define at least one ``chemical/`` concept."""
    found: list[tuple[CorpusFile, dict[str, Any], set[str]]] = []
    for entry in entries:
        document = load_entry(entry, prefix, failures)
        if document is None:
            continue
        graph = document.get("@graph")
        ids = {
            identifier
            for identifier in (reference_id(item) for item in graph if isinstance(item, dict))
            if identifier and id_prefix(identifier) == "chemical/"
        } if isinstance(graph, list) else set()
        if ids:
            found.append((entry, document, ids))
    return found


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    options = run_options(args)
    prefix = f"compounds{mode_label(options)}"
    suffixes = tuple(settings.document_suffixes)
    failures: list[str] = []

    plants = [
        entry
        for entry in find_documents(settings.data_root, DocumentRole.PLANT, slug=args.slug, suffixes=suffixes)
        if entry.slug in COMPOUND_MAP
    ]
    added: list[dict[str, Any]] = []
    already = 0
    for entry in plants:
        document = load_entry(entry, prefix, failures)
        if document is None:
            continue
        change = link_compounds(document, entry.slug)
        if change.status == "already_linked":
            already += 1
            if options.verbose:
                print(f"[{prefix}][skip] {entry.slug}: already lists compounds")
            continue
        if change.status == "added" and change.document is not None:
            write_back(change.document, entry.path, options)
            added.append({"slug": entry.slug, "compounds": change.compounds})
            print(f"[{prefix}][add] {entry.slug}: {', '.join(change.compounds)}")
    absent = sorted(set(COMPOUND_MAP) - {entry.slug for entry in plants}) if not args.slug else []
    print(
        f"[{prefix}] {len(plants)} mapped plants: {len(added)} updated, {already} already linked, "
        f"{len(absent)} mapped slugs not in corpus"
    )

    datasets = chemical_datasets(
        find_documents(settings.data_root, DocumentRole.REFERENCE_DATASET, suffixes=suffixes), prefix, failures
    )
    known = {identifier for _, _, ids in datasets for identifier in ids}
    unknown = missing_compounds(known)
    if datasets and args.extend_chemicals:
        entry, document, _ = datasets[0]
        updated, new_ids = extend_chemical_dataset(document)
        if new_ids:
            write_back(updated, entry.path, options)
            print(f"[{prefix}][add] {entry.slug}: {', '.join(new_ids)}")
            unknown = [item for item in unknown if item not in new_ids]
    if not datasets:
        print(f"[{prefix}] No chemical reference dataset found; compound ids not checked")
    elif unknown:
        print(f"[{prefix}] Compound ids missing from the chemical dataset: {', '.join(unknown)}")

    write_report(
        {
            "added": added,
            "alreadyLinked": already,
            "mappedSlugsNotInCorpus": absent,
            "missingCompounds": unknown if datasets else None,
            "parseFailures": failures,
        },
        args.report,
        prefix,
    )
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
