from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SURFACES_DIR = Path(__file__).resolve().parent / "definitions"
SURFACES_DIR_ENV = "RESPONSE_SECTIONS_SURFACES_DIR"
PROFILES = ("insights", "recommendations", "message")


@dataclass(slots=True)
class StatDefinition:
    label: str
    key: str


@dataclass(slots=True)
class QualityWarning:
    threshold: float
    title: str
    message: str


@dataclass(slots=True)
class SurfaceDefinition:
    surface_id: str
    version: str
    title: str
    profile: str
    text_field: str
    payload_schema: dict[str, Any]
    subtitle: str = ""
    empty_state: str = ""
    stats: list[StatDefinition] = field(default_factory=list)
    quality_warning: QualityWarning | None = None
    focus_field: str | None = None


class SurfaceRegistry:
    def __init__(self, config_dir: str | Path | None = None) -> None:
        self._config_dir = Path(config_dir or os.getenv(SURFACES_DIR_ENV) or DEFAULT_SURFACES_DIR)
        self._cache: dict[str, SurfaceDefinition] = {}

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def list_surfaces(self) -> list[str]:
        return sorted(path.stem for path in self._config_dir.glob("*.yaml"))

    def get(self, surface_id: str) -> SurfaceDefinition:
        if surface_id in self._cache:
            return self._cache[surface_id]

        path = self._config_dir / f"{surface_id}.yaml"
        if not path.exists():
            raise ValueError(f"Unknown surface_id '{surface_id}'.")

        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        profile = raw["profile"]
        if profile not in PROFILES:
            raise ValueError(f"Surface '{surface_id}' uses unsupported profile '{profile}'.")

        quality = raw.get("quality_warning")
        definition = SurfaceDefinition(
            surface_id=raw["surface_id"],
            version=str(raw["version"]),
            title=raw["title"],
            profile=profile,
            text_field=raw["text_field"],
            payload_schema=raw["payload_schema"],
            subtitle=raw.get("subtitle", ""),
            empty_state=raw.get("empty_state", ""),
            stats=[StatDefinition(label=item["label"], key=item["key"]) for item in raw.get("stats", [])],
            quality_warning=(
                QualityWarning(
                    threshold=float(quality["threshold"]),
                    title=quality["title"],
                    message=quality.get("message", ""),
                )
                if quality
                else None
            ),
            focus_field=raw.get("focus_field"),
        )
        logger.debug("Loaded surface '%s' from %s", surface_id, path)
        self._cache[surface_id] = definition
        return definition
