from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.logging import RichHandler

from response_sections.orchestrator import parse_profile, run_pipeline
from response_sections.services.ingest import read_text
from response_sections.surfaces.registry import PROFILES, SurfaceRegistry

app = typer.Typer(help="AI response text -> structured sections")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@app.command("list-surfaces")
def list_surfaces(config_dir: Optional[str] = typer.Option(None, help="Surface definitions directory")) -> None:
    registry = SurfaceRegistry(config_dir=config_dir)
    for surface_id in registry.list_surfaces():
        definition = registry.get(surface_id)
        print(f"{surface_id} [dim]({definition.profile})[/dim]")


@app.command("parse")
def parse(
    path: str = typer.Argument(..., help="Text file holding the assistant response"),
    profile: str = typer.Option("message", help="insights|recommendations|message"),
) -> None:
    if profile not in PROFILES:
        raise typer.BadParameter(f"Unknown profile '{profile}'. Choose one of: {', '.join(PROFILES)}.")
    if not Path(path).exists():
        raise typer.BadParameter(f"Input file not found: {path}")
    parsed = parse_profile(profile, read_text(path))
    if isinstance(parsed, list):
        payload = [item.model_dump() for item in parsed]
    else:
        payload = parsed.model_dump()
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("build-document")
def build_document(
    input_path: str = typer.Option(..., "--input", help="Response file (.json envelope, .txt or .md)"),
    surface: str = typer.Option(..., help="Surface id"),
    output_dir: str = typer.Option("outputs", help="Output directory"),
    config_dir: Optional[str] = typer.Option(None, help="Surface definitions directory"),
) -> None:
    try:
        json_file, html_file = run_pipeline(
            input_path=input_path,
            surface_id=surface,
            output_dir=output_dir,
            registry=SurfaceRegistry(config_dir=config_dir),
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print(f"[green]Document JSON:[/green] {json_file}")
    print(f"[green]Document HTML:[/green] {html_file}")


if __name__ == "__main__":
    app()
