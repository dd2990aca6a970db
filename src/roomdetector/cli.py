"""Command Line Interface for Room Detector.

This module provides a simple CLI for detecting rooms in a wall list,
querying connected walls and room boundaries, and rendering floor plans.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import CONNECT_THRESHOLD, DEFAULT_MAX_AREA, DEFAULT_MIN_AREA
from .core.graph import valid_walls
from .core.model import DetectionOptions, Room
from .core.topology import wall_components
from .engine.api import (
    detect_rooms,
    detect_rooms_by_floor,
    find_connected_walls,
    find_walls_for_room,
    summarize_rooms,
)
from .geom.polygon import room_perimeter
from .geom.units import format_area, format_length
from .io.parser import load_walls
from .visualization.generator import generate_floor_image

app = typer.Typer(
    name="room-detector",
    help="A CLI tool for detecting rooms from floor-plan walls",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


def _fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _rooms_table(rooms: List[Room], unit: str, title: Optional[str] = None) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Room ID", style="cyan")
    table.add_column("Vertices", justify="center")
    table.add_column("Area", justify="right", style="green")
    table.add_column("Perimeter", justify="right")
    table.add_column("Center", style="magenta")

    for i, room in enumerate(rooms):
        table.add_row(
            str(i),
            room.id,
            str(room.vertex_count),
            format_area(room.area, unit),
            format_length(room_perimeter(room), unit),
            f"({room.center.x:.2f}, {room.center.z:.2f})",
        )
    return table


def _check_unit(unit: str) -> None:
    if unit not in ("m", "ft"):
        raise typer.BadParameter("unit must be 'm' or 'ft'", param_hint="--unit")


@app.command()
def detect(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls or scene JSON file"),
    min_area: float = typer.Option(DEFAULT_MIN_AREA, "--min-area", help="Smallest room area"),
    max_area: float = typer.Option(DEFAULT_MAX_AREA, "--max-area", help="Largest room area"),
    unit: str = typer.Option("m", "--unit", "-u", help="Display unit: m or ft"),
    by_floor: bool = typer.Option(False, "--by-floor", help="Detect rooms per floor level"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Detect rooms enclosed by the walls of a floor plan."""
    _check_unit(unit)
    _configure_logging(verbose)
    try:
        wall_list = load_walls(walls)
        options = DetectionOptions(min_area=min_area, max_area=max_area)
        console.print(f"[green]✓[/green] Loaded {len(wall_list)} walls from {walls}")

        if by_floor:
            floors = detect_rooms_by_floor(wall_list, options)
            all_rooms = []
            for level, rooms in floors.items():
                console.print(_rooms_table(rooms, unit, title=f"Floor {level}"))
                all_rooms.extend(rooms)
        else:
            all_rooms = detect_rooms(wall_list, options)
            console.print(_rooms_table(all_rooms, unit))

        summary = summarize_rooms(all_rooms)
        console.print(
            f"\n[bold]{summary.count} rooms[/bold], total area "
            f"[green]{format_area(summary.total_area, unit)}[/green]"
        )

    except FileNotFoundError as e:
        _fail(f"File not found - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ValueError as e:
        _fail(str(e))


@app.command()
def connected(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls or scene JSON file"),
    wall_ids: List[str] = typer.Option(..., "--wall", help="Starting wall id (repeatable)"),
    threshold: float = typer.Option(CONNECT_THRESHOLD, "--threshold", "-t", help="Contact distance"),
):
    """List every wall connected to the starting walls."""
    try:
        wall_list = load_walls(walls)
        found = find_connected_walls(wall_ids, wall_list, threshold)

        table = Table(title=f"{len(found)} connected walls")
        table.add_column("Wall ID", style="cyan")
        table.add_column("Seed", justify="center")
        for wall_id in found:
            table.add_row(wall_id, "✓" if wall_id in wall_ids else "")
        console.print(table)

    except FileNotFoundError as e:
        _fail(f"File not found - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ValueError as e:
        _fail(str(e))


@app.command("room-walls")
def room_walls(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls or scene JSON file"),
    index: Optional[int] = typer.Option(None, "--index", "-i", help="Only this room (detection order)"),
):
    """Show the walls bounding each detected room."""
    try:
        wall_list = load_walls(walls)
        rooms = detect_rooms(wall_list)

        if index is not None:
            if not 0 <= index < len(rooms):
                _fail(f"Room index {index} out of range (found {len(rooms)} rooms)")
            selected = [(index, rooms[index])]
        else:
            selected = list(enumerate(rooms))

        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Area", justify="right", style="green")
        table.add_column("Walls", style="cyan")
        for i, room in selected:
            table.add_row(str(i), format_area(room.area), ", ".join(find_walls_for_room(room, wall_list)))
        console.print(table)

    except FileNotFoundError as e:
        _fail(f"File not found - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ValueError as e:
        _fail(str(e))


@app.command()
def render(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls or scene JSON file"),
    output: Path = typer.Option(..., "--out", "-o", help="Path to output PNG file"),
    unit: str = typer.Option("m", "--unit", "-u", help="Area label unit: m or ft"),
):
    """Render walls and detected rooms to a PNG image."""
    _check_unit(unit)
    try:
        wall_list = load_walls(walls)
        rooms = detect_rooms(wall_list)
        if not generate_floor_image(wall_list, rooms, output, unit=unit):
            _fail(f"Could not render {output}")
        console.print(f"[green]✓[/green] {len(rooms)} rooms rendered to {output}")

    except FileNotFoundError as e:
        _fail(f"File not found - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ValueError as e:
        _fail(str(e))


@app.command()
def info(
    walls: Path = typer.Option(..., "--walls", "-w", help="Path to walls or scene JSON file"),
):
    """Show information about a wall list."""
    try:
        wall_list = load_walls(walls)
        room_walls_list = valid_walls(wall_list)

        console.print(f"[bold]Wall Information: {walls}[/bold]")
        console.print(f"[cyan]Walls: {len(wall_list)}[/cyan] ({len(room_walls_list)} room walls)")

        table = Table()
        table.add_column("Group", justify="right")
        table.add_column("Walls", justify="center")
        table.add_column("Wall IDs", style="cyan")
        for i, group in enumerate(wall_components(wall_list)):
            table.add_row(str(i + 1), str(len(group)), ", ".join(sorted(group)))
        console.print(table)

    except FileNotFoundError as e:
        _fail(f"File not found - {e}")
    except json.JSONDecodeError as e:
        _fail(f"Invalid JSON - {e}")
    except ValueError as e:
        _fail(str(e))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
