"""Helpers for corpus identifiers and external cross-reference URLs."""

from __future__ import annotations

import re
from typing import Any, Final, Literal

HERBAPEDIA_BASE: Final[str] = "https://www.herbapedia.org/"

RECOGNIZED_PREFIXES: Final[tuple[str, ...]] = (
    "plant/",
    "tcm/",
    "ayurveda/",
    "western/",
    "category/",
    "nature/",
    "flavor/",
    "meridian/",
    "rasa/",
    "virya/",
    "vipaka/",
    "guna/",
    "dosha/",
    "chemical/",
)

ReferenceShape = Literal["object", "iri", "unknown"]


def reference_id(value: Any) -> str | None:
    """Return the identifier carried by a reference value (object or string)."""
    if isinstance(value, dict):
        ref = value.get("@id")
        return ref.strip() if isinstance(ref, str) and ref.strip() else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def classify_reference(value: Any) -> ReferenceShape:
    """Classify a reference as an ``@id`` object, a recognised IRI string or unknown."""
    if isinstance(value, dict):
        return "object" if reference_id(value) else "unknown"
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("http") or text.startswith(RECOGNIZED_PREFIXES):
            return "iri"
    return "unknown"


def iter_references(value: Any) -> list[Any]:
    """Flatten a single reference or a list of references."""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def local_id(identifier: str) -> str:
    """Strip the public base IRI and any fragment so ids compare by corpus path."""
    text = identifier.strip()
    if text.startswith(HERBAPEDIA_BASE):
        text = text[len(HERBAPEDIA_BASE):]
    return text.split("#", 1)[0]


def id_prefix(identifier: str) -> str | None:
    """Return the namespace prefix (``nature/``) of a corpus identifier."""
    text = local_id(identifier)
    if "/" not in text or text.startswith("http"):
        return None
    return text.split("/", 1)[0] + "/"


def slug_from_id(identifier: str | None, prefix: str = "plant/") -> str | None:
    if not identifier:
        return None
    text = local_id(identifier)
    if text.startswith(prefix):
        text = text[len(prefix):]
    return text or None


def normalize_url(url: str) -> str:
    """Normalise a URL for duplicate detection: https, lowercase host, no trailing slash."""
    if not url:
        return url
    text = url.strip()
    text = re.sub(r"^http://", "https://", text, flags=re.I)
    match = re.match(r"^(https://)([^/]+)(.*)$", text, flags=re.I)
    if match:
        text = match.group(1).lower() + match.group(2).lower() + match.group(3)
    if text.endswith("/"):
        text = text[:-1]
    return text


def same_as_urls(document: dict[str, Any]) -> list[str]:
    """Return the URLs listed in a document's ``sameAs`` (string or list, objects or strings)."""
    urls: list[str] = []
    for link in iter_references(document.get("sameAs")):
        url = reference_id(link)
        if url:
            urls.append(url)
    return urls


def build_gbif_url(base: str, species_key: str | int) -> str:
    return f"{base.rstrip('/')}/{species_key}"


def build_wikidata_url(base: str, qid: str) -> str:
    return f"{base.rstrip('/')}/{qid}"


def extract_qid(uri: str) -> str | None:
    match = re.search(r"Q\d+$", uri or "")
    return match.group(0) if match else None
