from pathlib import Path

import pytest

from response_sections.surfaces.registry import SURFACES_DIR_ENV, SurfaceRegistry


def test_registry_lists_surfaces() -> None:
    registry = SurfaceRegistry()
    surfaces = registry.list_surfaces()
    for surface_id in ("insights", "recommendations", "chat", "query", "weekly_report"):
        assert surface_id in surfaces


def test_registry_loads_definition() -> None:
    registry = SurfaceRegistry()
    definition = registry.get("recommendations")
    assert definition.profile == "recommendations"
    assert definition.text_field == "recommendations"
    assert definition.focus_field == "focusArea"
    assert definition.quality_warning is not None
    assert definition.quality_warning.threshold == 75
    assert registry.get("recommendations") is definition


def test_registry_loads_stats() -> None:
    definition = SurfaceRegistry().get("insights")
    assert [stat.key for stat in definition.stats] == [
        "totalSchedules",
        "totalSkills",
        "totalTimetables",
        "totalWorkingHourRecords",
    ]


def test_unknown_surface_raises() -> None:
    with pytest.raises(ValueError, match="Unknown surface_id"):
        SurfaceRegistry().get("does_not_exist")


def test_config_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "notes.yaml").write_text(
        "\n".join(
            [
                "surface_id: notes",
                'version: "0.1.0"',
                "title: Notes",
                "profile: message",
                "text_field: text",
                "payload_schema: {type: object}",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv(SURFACES_DIR_ENV, str(tmp_path))
    registry = SurfaceRegistry()
    assert registry.list_surfaces() == ["notes"]
    assert registry.get("notes").stats == []


def test_unsupported_profile_raises(tmp_path: Path) -> None:
    (tmp_path / "odd.yaml").write_text(
        "surface_id: odd\nversion: '1'\ntitle: Odd\nprofile: tables\ntext_field: t\npayload_schema: {}\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="unsupported profile"):
        SurfaceRegistry(config_dir=tmp_path).get("odd")
