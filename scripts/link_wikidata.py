#!/usr/bin/env python
"""Link TCM profiles (or plant entities) to Wikidata items.

Profiles are matched through the scientific name of the plant they derive
from, followed by the English profile and plant names. Entity search runs for
each name; a SPARQL taxon-name query is tried once when every search misses.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

import httpx

SCRIPTS_DIR = Path(__file__).resolve().parent
REPO_ROOT = SCRIPTS_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

from herbapedia_tools.core.config import Settings  # noqa: E402
from herbapedia_tools.core.models import CorpusFile, DocumentRole  # noqa: E402
from herbapedia_tools.core.uris import classify_reference, reference_id, slug_from_id  # noqa: E402
from herbapedia_tools.corpus import find_documents  # noqa: E402
from herbapedia_tools.linking import ExternalLinker, WikidataClient, WikidataTarget, has_link  # noqa: E402
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

TARGET_ROLES = {"tcm": DocumentRole.TCM_PROFILE, "plant": DocumentRole.PLANT}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    add_corpus_arguments(parser)
    add_link_arguments(parser)
    parser.add_argument(
        "--target",
        choices=sorted(TARGET_ROLES),
        default="tcm",
        help="Which documents to link (default: tcm profiles).",
    )
    return parser.parse_args(argv)


def build_linker(settings: Settings, http_client: httpx.Client | None = None) -> ExternalLinker:
    return ExternalLinker(WikidataTarget(WikidataClient(settings, client=http_client)), settings)


def english_name(document: dict[str, Any] | None) -> str | None:
    name = (document or {}).get("name")
    if isinstance(name, dict):
        value = name.get("en")
        return value if isinstance(value, str) else None
    return name if isinstance(name, str) else None


def load_plants(settings: Settings, prefix: str, failures: list[str]) -> dict[str, dict[str, Any]]:
    plants: dict[str, dict[str, Any]] = {}
    for entry in find_documents(settings.data_root, DocumentRole.PLANT, suffixes=tuple(settings.document_suffixes)):
        document = load_entry(entry, prefix, failures)
        if document is None:
            continue
        plants[entry.slug] = document
        id_slug = slug_from_id(reference_id(document.get("@id")))
        if id_slug:
            plants.setdefault(id_slug, document)
    return plants


def profile_names(
    profile: dict[str, Any],
    plants: dict[str, dict[str, Any]],
) -> tuple[list[str] | None, str | None]:
    """Return ``(names, None)`` or ``(None, skip_reason)`` for one TCM profile."""
    reference = profile.get("derivedFromPlant")
    plant_slug = slug_from_id(reference_id(reference)) if classify_reference(reference) != "unknown" else None
    if plant_slug is None:
        return None, "no_plant_ref"
    plant = plants.get(plant_slug)
    if plant is None:
        return None, "plant_not_found"
    raw = plant.get("scientificName")
    name = normalize_scientific_name(raw if isinstance(raw, str) else None)
    if name.skipped:
        return None, name.reason
    return [*name.candidates, english_name(profile), english_name(plant)], None


def plant_names(plant: dict[str, Any]) -> tuple[list[str] | None, str | None]:
    raw = plant.get("scientificName")
    name = normalize_scientific_name(raw if isinstance(raw, str) else None)
    if name.skipped:
        return None, name.reason
    return [*name.candidates, english_name(plant)], None


def main(argv: Sequence[str] | None = None, *, http_client: httpx.Client | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args, **link_overrides(args))
    options = run_options(args)
    prefix = f"wikidata{mode_label(options)}"
    failures: list[str] = []
    role = TARGET_ROLES[args.target]
    plants = load_plants(settings, prefix, failures) if role is DocumentRole.TCM_PROFILE else {}
    entries: list[CorpusFile] = find_documents(
        settings.data_root, role, slug=args.slug, suffixes=tuple(settings.document_suffixes)
    )
    if args.limit is not None:
        entries = entries[: args.limit]

    summary = LinkSummary()
    with build_linker(settings, http_client) as linker:
        for entry in entries:
            document = load_entry(entry, prefix, failures)
            if document is None:
                continue
            if has_link(document, linker.target.domain):
                summary.record(entry.slug, "already_linked")
                continue
            if role is DocumentRole.TCM_PROFILE:
                names, reason = profile_names(document, plants)
            else:
                names, reason = plant_names(document)
            if names is None:
                summary.record(entry.slug, reason or "skipped")
                if options.verbose:
                    print(f"[{prefix}][skip] {entry.slug}: {reason}")
                continue
            result = linker.link(document, names)
            summary.record_result(entry.slug, result)
            if result.status == "linked":
                write_back(linker.apply(document, result), entry.path, options)
                print(f"[{prefix}][ok] {entry.slug} -> {result.external_id} via {result.method}")
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
