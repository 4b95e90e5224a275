from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from response_sections.models import (
    MessageResult,
    Notice,
    RecommendationItem,
    Section,
    Stat,
    SurfaceDocument,
)
from response_sections.parsing.insights import parse_insights
from response_sections.parsing.message import parse_message
from response_sections.parsing.recommendations import parse_recommendations
from response_sections.rendering.html_renderer import render_html
from response_sections.services.ingest import load_payload, unwrap_envelope
from response_sections.services.validator import validate_payload_schema
from response_sections.surfaces.registry import SurfaceDefinition, SurfaceRegistry

logger = logging.getLogger(__name__)


def parse_profile(profile: str, text: str | None) -> list[Section] | list[RecommendationItem] | MessageResult:
    if profile == "insights":
        return parse_insights(text)
    if profile == "recommendations":
        return parse_recommendations(text)
    if profile == "message":
        return parse_message(text)
    raise ValueError(f"Unsupported parser profile '{profile}'.")


def build_surface_document(definition: SurfaceDefinition, payload: dict[str, Any]) -> SurfaceDocument:
    data = unwrap_envelope(payload)
    validate_payload_schema(data, definition.payload_schema, definition.surface_id)
    text = data.get(definition.text_field) or ""

    document = SurfaceDocument(
        surface_id=definition.surface_id,
        title=definition.title,
        subtitle=definition.subtitle,
        profile=definition.profile,
        metadata={"schema_version": definition.version},
    )
    if not text.strip():
        document.empty_state = definition.empty_state
        return document

    parsed = parse_profile(definition.profile, text)
    if definition.profile == "insights":
        document.sections = parsed
    elif definition.profile == "recommendations":
        document.recommendations = parsed
        if not parsed:
            logger.info("No recommendation items recognized for '%s', keeping raw text", definition.surface_id)
            document.raw_text = text
    else:
        document.message = parsed

    document.stats = _stats_for(definition, data)
    document.notices = _notices_for(definition, data)
    document.focus_area = _focus_area_for(definition, data)
    return document


def run_pipeline(
    input_path: str | Path,
    surface_id: str,
    output_dir: str | Path = "outputs",
    registry: SurfaceRegistry | None = None,
) -> tuple[Path, Path]:
    surface_registry = registry or SurfaceRegistry()
    definition = surface_registry.get(surface_id)
    payload = load_payload(input_path, definition.text_field)
    document = build_surface_document(definition, payload)

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    generated_at = datetime.now(timezone.utc)
    run_id = generated_at.strftime("%y%m%d_%H%M_%f")
    document.metadata["document_id"] = f"{surface_id}.{run_id}"
    document.metadata["generated_at_utc"] = generated_at.isoformat()
    document.metadata["source_file"] = str(input_path)

    json_content = document.model_dump_json(indent=2)
    html_content = render_html(document)

    json_file = output_path / f"{surface_id}.{run_id}.document.json"
    html_file = output_path / f"{surface_id}.{run_id}.document.html"
    latest_json_file = output_path / f"{surface_id}.document.json"
    latest_html_file = output_path / f"{surface_id}.document.html"
    json_file.write_text(json_content, encoding="utf-8")
    html_file.write_text(html_content, encoding="utf-8")
    latest_json_file.write_text(json_content, encoding="utf-8")
    latest_html_file.write_text(html_content, encoding="utf-8")
    logger.info("Wrote %s and %s", json_file, html_file)
    return json_file, html_file


def _stats_for(definition: SurfaceDefinition, data: dict[str, Any]) -> list[Stat]:
    counters = data.get("dataStats")
    if not definition.stats or not isinstance(counters, dict):
        return []
    return [Stat(label=stat.label, value=int(counters.get(stat.key) or 0)) for stat in definition.stats]


def _notices_for(definition: SurfaceDefinition, data: dict[str, Any]) -> list[Notice]:
    warning = definition.quality_warning
    quality = data.get("quality")
    if warning is None or not isinstance(quality, dict):
        return []
    score = quality.get("score")
    if score is None or float(score) >= warning.threshold:
        return []
    details = ". ".join(str(item) for item in quality.get("warnings") or [])
    message = " ".join(part for part in (warning.message, details) if part)
    return [Notice(severity="warning", title=warning.title, message=message)]


def _focus_area_for(definition: SurfaceDefinition, data: dict[str, Any]) -> str | None:
    if not definition.focus_field:
        return None
    focus = data.get(definition.focus_field)
    if not focus or focus == "null":
        return None
    return str(focus)
