from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from ..core.ray import Ray
from ..core.vector import Vector
from ..examples.scenarios import generate_scenario
from ..sdk import trace_from_config
from ..shapes.triangle import Triangle

app = typer.Typer(help="rayvec ray/triangle tracing utilities")
scenario_app = typer.Typer(help="Sample scenario helpers")
app.add_typer(scenario_app, name="scenario")


def _configure_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format="[%(levelname)s] %(message)s")
    logging.getLogger("rayvec").setLevel(numeric)


def _parse_vector(text: str, param_hint: str) -> Vector:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise typer.BadParameter(f"expected 'x,y,z', got '{text}'", param_hint=param_hint)
    try:
        return Vector(*(float(p) for p in parts))
    except ValueError:
        raise typer.BadParameter(f"expected three numbers, got '{text}'", param_hint=param_hint) from None


@app.command("trace")
def trace(
    config: Path = typer.Argument(..., exists=True, readable=True, help="Path to YAML scenario file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Override output path (extension sets format)."),
    workers: Optional[int] = typer.Option(None, "--workers", help="Override number of tracing threads."),
    no_reflect: bool = typer.Option(False, "--no-reflect", help="Skip computing reflected rays."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (e.g. INFO, DEBUG)."),
) -> None:
    """Run a tracing scenario specified by a YAML config."""

    _configure_logging(log_level)
    if output is not None and output.suffix.lower() not in {".npz", ".json"}:
        raise typer.BadParameter(f"Unsupported output extension '{output.suffix}'", param_hint="--output")
    if workers is not None and workers < 1:
        raise typer.BadParameter("workers must be >= 1.", param_hint="--workers")

    result = trace_from_config(
        config,
        output=output,
        workers=workers,
        reflect=False if no_reflect else None,
    )
    stats = result.stats
    target = result.output_path if result.output_path is not None else "(no output)"
    typer.echo(f"Completed {stats['hits']} hits from {stats['rays']} rays → {target}")


@app.command("hit")
def hit(
    corner: List[str] = typer.Option(..., "--corner", "-c", help="Triangle corner as x,y,z (give exactly three)."),
    start: str = typer.Option(..., "--start", help="Ray start as x,y,z."),
    direction: str = typer.Option(..., "--direction", help="Ray direction as x,y,z."),
    reflect: bool = typer.Option(False, "--reflect", help="Also print the reflected ray."),
) -> None:
    """Cast a single ray against a single triangle."""

    if len(corner) != 3:
        raise typer.BadParameter(f"exactly three corners are required, got {len(corner)}.", param_hint="--corner")
    a, b, c = (_parse_vector(text, "--corner") for text in corner)
    ray = Ray(_parse_vector(start, "--start"), _parse_vector(direction, "--direction"))
    triangle = Triangle(a, b, c)

    info = triangle.hit_info(ray)
    if info is None:
        typer.echo("no hit")
        return
    typer.echo(f"hit point {info.point} normal {info.normal}")
    if reflect:
        bounced = ray.reflect(info)
        typer.echo(f"reflected start {bounced.start} direction {bounced.direction}")


@scenario_app.command("generate")
def scenario_generate(
    output: Path = typer.Argument(..., help="Output scenario path (.yaml)."),
    preset: str = typer.Option("demo", "--preset", help="Scenario preset (demo, grid, oblique)."),
) -> None:
    """Write a sample scenario useful for tracing demos."""

    out = output.resolve()
    try:
        generate_scenario(preset=preset, path=out)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--preset") from None
    typer.echo(f"Wrote sample scenario to {out}")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
