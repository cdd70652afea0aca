"""Command Line Interface for Plan Graph.

This module provides a small CLI to inspect the rooms and wall measurements
inferred from a plan JSON file.
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from . import config
from .core.model import Plan
from .geom.metrics import PlanMetrics, compute_plan_metrics
from .geom.polygon import room_area
from .io.parser import PlanValidationError, load_plan, save_plan

app = typer.Typer(
    name="plangraph",
    help="Infer rooms and wall-thickness corrected measurements from floor plan graphs",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(plan_path: Path) -> Plan:
    try:
        return load_plan(str(plan_path))
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except PlanValidationError as e:
        console.print(f"[red]Error: Invalid plan - {e}[/red]")
        raise typer.Exit(1)


def _measure(plan: Plan, turn: int) -> PlanMetrics:
    if turn not in (config.TURN_CLOCKWISE, config.TURN_COUNTERCLOCKWISE):
        console.print(f"[red]Error: --turn must be -1 or 1, got {turn}[/red]")
        raise typer.Exit(1)
    return compute_plan_metrics(plan, turn=turn)


@app.command()
def rooms(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    turn: int = typer.Option(config.TURN_DIRECTION, "--turn", help="Face tracing turn direction (-1 or 1)"),
    as_json: bool = typer.Option(False, "--json", help="Print rooms as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """List the rooms enclosed by the plan walls."""
    _configure_logging(verbose)
    plan_obj = _load(plan)
    metrics = _measure(plan_obj, turn)

    if as_json:
        payload = [
            {
                "id": room.id,
                "name": room.name,
                "nodeIds": list(room.node_ids),
                "points": [{"x": p.x, "y": p.y} for p in room.points],
                "area": room_area(room, plan_obj.scale),
                "innerArea": metrics.inner_areas[room.id],
                "perimeter": metrics.perimeters[room.id],
            }
            for room in metrics.rooms
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    if not metrics.rooms:
        console.print("[yellow]No rooms found[/yellow]")
        return

    table = Table(title=f"Rooms ({len(metrics.rooms)})")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Nodes")
    table.add_column("Area m²", justify="right")
    table.add_column("Inner m²", justify="right")
    table.add_column("Perimeter m", justify="right")

    for room in metrics.rooms:
        table.add_row(
            str(room.id),
            room.name,
            "-".join(str(n) for n in room.node_ids),
            f"{room_area(room, plan_obj.scale):.2f}",
            f"{metrics.inner_areas[room.id]:.2f}",
            f"{metrics.perimeters[room.id]:.2f}",
        )

    console.print(table)


@app.command()
def walls(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    outer: bool = typer.Option(False, "--outer", help="Report centre line lengths only"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """List walls with their outer and inner lengths."""
    _configure_logging(verbose)
    plan_obj = _load(plan)
    metrics = _measure(plan_obj, config.TURN_DIRECTION)

    table = Table(title=f"Walls ({len(plan_obj.walls)})")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Nodes")
    table.add_column("Thickness m", justify="right")
    table.add_column("Length m", justify="right")
    if not outer:
        table.add_column("Inner m", justify="right")

    for wall in plan_obj.walls:
        row = [
            str(wall.id),
            wall.name,
            f"{wall.a}-{wall.b}",
            f"{wall.thickness:.2f}",
            f"{metrics.wall_length(wall.id, use_inner=False):.2f}",
        ]
        if not outer:
            inner = metrics.inner_lengths.get(wall.id)
            row.append(f"{inner:.2f}" if inner is not None else "-")
        table.add_row(*row)

    console.print(table)


@app.command()
def stats(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    outer: bool = typer.Option(False, "--outer", help="Sum outer areas instead of inner areas"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Show the room count and total floor area."""
    _configure_logging(verbose)
    plan_obj = _load(plan)
    metrics = _measure(plan_obj, config.TURN_DIRECTION)

    console.print(f"Rooms: [bold]{len(metrics.rooms)}[/bold]")
    console.print(f"Total area: [bold]{metrics.total_area(use_inner=not outer):.2f}[/bold] m²")


@app.command()
def normalize(
    plan: Path = typer.Option(..., "--plan", "-p", help="Path to plan JSON file"),
    output: Path = typer.Option(..., "--out", help="Path to output plan JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Validate a plan document and write its normalised form."""
    _configure_logging(verbose)
    plan_obj = _load(plan)
    save_plan(plan_obj, str(output))
    console.print(
        f"[green]✓[/green] Saved {len(plan_obj.nodes)} nodes and {len(plan_obj.walls)} walls to {output}"
    )


def main():
    app()


if __name__ == "__main__":
    main()
