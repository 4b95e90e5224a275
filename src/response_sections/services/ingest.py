from __future__ import annotations

import json
from pathlib import Path
from typing import Any

TEXT_SUFFIXES = {".txt", ".md", ".markdown"}


def load_payload(path: str | Path, text_field: str) -> dict[str, Any]:
    """Load an assistant response from disk as the surface's ``data`` object.

    ``.json`` files hold the backend envelope (``{"success": ..., "data": {...}}``)
    or the bare ``data`` object. Text and markdown files hold the raw assistant
    text, which is placed under ``text_field``.
    """
    source = Path(path)
    if not source.exists():
        raise ValueError(f"Input file not found: {source}")

    suffix = source.suffix.lower()
    content = source.read_text(encoding="utf-8")
    if suffix in TEXT_SUFFIXES:
        return {text_field: content}
    if suffix != ".json":
        raise ValueError(f"Unsupported input file type '{suffix}'. Use .json, .txt or .md.")

    try:
        raw = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Input file is not valid JSON: {exc}") from exc
    return unwrap_envelope(raw)


def unwrap_envelope(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError("Response payload must be a JSON object.")
    data = raw.get("data")
    if isinstance(data, dict):
        return data
    return raw


def read_text(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")
