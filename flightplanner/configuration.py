"""Mini README: Centralised configuration for the flight planner.

Structure:
    * FlightplannerSettings - Pydantic settings model read from the environment.
    * get_settings - cached accessor shared by the CLI, storage and web layers.

Usage:
    Values can be overridden with ``FLIGHTPLANNER_*`` environment variables or a
    ``.env`` file. The defaults mirror the values operators used in the field:
    2 m/s cruise speed, 1 s hold time and a 2 m acceptance radius.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class FlightplannerSettings(BaseSettings):
    """Runtime configuration for the flight planner tools."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    output_directory: Path = Field(
        Path("flightplans"),
        description="Directory where exported mavlink and JSON files are written.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    default_velocity: float = Field(2.0, description="Cruise speed in m/s.", gt=0)
    default_hold_time: float = Field(
        1.0, description="Hold time at each waypoint in seconds.", ge=0
    )
    default_bearing: float = Field(
        0.0, description="Bearing assigned to imported KMZ waypoints.", ge=0, le=360
    )
    default_waypoint_radius: float = Field(
        2.0, description="Acceptance radius assigned to imported KMZ waypoints.", ge=0
    )
    default_step_size: float = Field(
        10.0, description="Spacing in metres used when densifying a route.", gt=0
    )

    class Config:
        env_prefix = "FLIGHTPLANNER_"
        env_file = ".env"
        case_sensitive = False

    @validator("output_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories so ``~/plans`` works as expected."""

        return Path(value).expanduser()


@lru_cache()
def get_settings() -> FlightplannerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FlightplannerSettings()
