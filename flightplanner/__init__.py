"""Mini README: Core package initializer for the flight planner.

The package turns survey flight plans between the QGC mavlink waypoint
format, Google Earth coordinate paths and a JSON document, and offers the
route edits operators need before a survey (altitude, bearing, radius and
waypoint densification). The most used names are re-exported here.
"""

from .errors import (
    FlightplanError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    ParseError,
    PreconditionViolationError,
)
from .logging_utils import get_logger
from .model import Flightplan, PointOfInterest, Waypoint

__all__ = [
    "Flightplan",
    "FlightplanError",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "ParseError",
    "PointOfInterest",
    "PreconditionViolationError",
    "Waypoint",
    "get_logger",
]
