"""Mini README: Command-line tool for converting and editing flight plans.

Commands:
    * inspect - print a summary of a mavlink, JSON or KMZ/KML file.
    * convert - re-save a flight plan as mavlink or JSON.
    * transform - apply altitude/bearing/radius edits or densify the route.
    * serve - start the HTTP service with uvicorn.

Defaults for velocity, hold time, KMZ bearing and radius come from the
``FLIGHTPLANNER_*`` settings. Flight plan errors are reported on stderr with
exit code 1.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from flightplanner.configuration import get_settings
from flightplanner.errors import FlightplanError
from flightplanner.interface import apply_edits, summarise
from flightplanner.logging_utils import configure_root_logger, get_logger
from flightplanner.model import Flightplan
from flightplanner.storage import load_flightplan, save_json, save_mavlink

LOGGER = get_logger(__name__)

cli = typer.Typer(help="Convert, inspect and edit survey flight plans.")


class OutputFormat(str, Enum):
    MAVLINK = "mavlink"
    JSON = "json"


def _fail(error: FlightplanError) -> None:
    LOGGER.error("Flight plan operation failed: %s", error)
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _load(path: Path, name: Optional[str], bearing: Optional[float], radius: Optional[float]) -> Flightplan:
    try:
        return load_flightplan(path, name=name, bearing=bearing, waypoint_radius=radius)
    except FlightplanError as error:
        _fail(error)


def _save(
    plan: Flightplan,
    output_format: OutputFormat,
    output_dir: Optional[Path],
    velocity: Optional[float],
    hold_time: Optional[float],
) -> Path:
    directory = output_dir or get_settings().output_directory
    try:
        if output_format is OutputFormat.MAVLINK:
            return save_mavlink(plan, directory, velocity=velocity, hold_time=hold_time)
        return save_json(plan, directory)
    except FlightplanError as error:
        _fail(error)


@cli.command()
def inspect(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Flight plan file."),
    name: Optional[str] = typer.Option(None, help="Name for KMZ/KML input."),
) -> None:
    """Print a short summary of a flight plan file."""

    plan = _load(path, name, None, None)
    for key, value in summarise(plan).items():
        typer.echo(f"{key}: {value}")


@cli.command()
def convert(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Flight plan file."),
    to: OutputFormat = typer.Option(OutputFormat.JSON, "--to", help="Output format."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for the written file."),
    name: Optional[str] = typer.Option(None, help="Name for KMZ/KML input."),
    bearing: Optional[float] = typer.Option(None, help="Bearing for KMZ/KML waypoints."),
    radius: Optional[float] = typer.Option(None, help="Radius for KMZ/KML waypoints."),
    velocity: Optional[float] = typer.Option(None, help="Cruise speed in m/s for mavlink output."),
    hold_time: Optional[float] = typer.Option(None, help="Hold time in seconds for mavlink output."),
) -> None:
    """Convert a flight plan file to mavlink or JSON."""

    plan = _load(path, name, bearing, radius)
    destination = _save(plan, to, output_dir, velocity, hold_time)
    typer.echo(f"Wrote {destination}")


@cli.command()
def transform(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Flight plan file."),
    to: OutputFormat = typer.Option(OutputFormat.JSON, "--to", help="Output format."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for the written file."),
    step_size: Optional[float] = typer.Option(None, help="Add waypoints every N metres."),
    densify: bool = typer.Option(
        False, "--densify", help="Add waypoints at the configured default step size."
    ),
    altitude: Optional[float] = typer.Option(None, help="Altitude for all waypoints."),
    radius: Optional[float] = typer.Option(None, help="Acceptance radius for all waypoints."),
    bearing: Optional[float] = typer.Option(None, help="Bearing for all waypoints."),
    bearing_to_center: bool = typer.Option(
        False, "--bearing-to-center", help="Face interior waypoints towards the route centre."
    ),
    velocity: Optional[float] = typer.Option(None, help="Cruise speed in m/s for mavlink output."),
    hold_time: Optional[float] = typer.Option(None, help="Hold time in seconds for mavlink output."),
) -> None:
    """Edit a flight plan and write the result."""

    plan = _load(path, None, None, None)
    try:
        apply_edits(
            plan,
            step_size=step_size,
            densify=densify,
            altitude=altitude,
            radius=radius,
            bearing=bearing,
            bearing_to_center=bearing_to_center,
        )
    except FlightplanError as error:
        _fail(error)
    destination = _save(plan, to, output_dir, velocity, hold_time)
    typer.echo(f"Wrote {destination} ({plan.num_waypoints} waypoints)")


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the HTTP service using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger()

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(f"Starting Flightplanner on {effective_host}:{effective_port}.")
    typer.echo(f"API docs at http://{browser_host}:{effective_port}/docs")
    uvicorn.run(
        "flightplanner.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


if __name__ == "__main__":
    cli()
