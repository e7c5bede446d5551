"""JSON-LD document codec: parse, encode and atomic write-back."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from .exceptions import DocumentParseError


def load_document(path: Path) -> dict[str, Any]:
    """Read a corpus document, raising :class:`DocumentParseError` when it is not a JSON object."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentParseError(path, f"not valid UTF-8 ({exc.reason})") from exc
    return parse_document(text, source=path)


def parse_document(text: str, *, source: Path | str = "<string>") -> dict[str, Any]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(source, f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise DocumentParseError(source, f"expected a JSON object, found {type(payload).__name__}")
    return payload


def encode_document(document: Any) -> str:
    """Serialise using the corpus conventions: two-space indent, UTF-8 text, trailing newline."""
    return json.dumps(document, ensure_ascii=False, indent=2) + "\n"


def dump_document(document: Any, path: Path) -> None:
    """Overwrite ``path`` atomically so an interrupted run never leaves a truncated document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, encoding="utf-8", delete=False, suffix=".tmp"
    ) as tmp:
        tmp.write(encode_document(document))
        tmp.flush()
        os.fsync(tmp.fileno())
        temp_name = tmp.name
    os.replace(temp_name, path)


def dump_json(data: Any, path: Path) -> None:
    """Write JSON to disk with UTF-8 encoding, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
