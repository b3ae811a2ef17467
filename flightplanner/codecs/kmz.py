"""Mini README: Minimal importer for Google Earth path exports.

Only the coordinate list is read: the line following the ``<coordinates>``
marker holds whitespace separated ``longitude,latitude,altitude`` triples.
This is deliberately not a KML parser; anything else in the file is ignored.
"""

from __future__ import annotations

from typing import List

from ..errors import ParseError
from ..logging_utils import get_logger
from ..model.waypoint import Waypoint
from .document import DecodedFlightplan

LOGGER = get_logger(__name__)

COORDINATES_MARKER = "<coordinates>"


def _coordinate_line(kmz: str) -> str:
    lines = kmz.split("\n")
    for index, line in enumerate(lines):
        if COORDINATES_MARKER in line:
            if index + 1 >= len(lines):
                break
            return lines[index + 1]
    raise ParseError("No coordinate list found after a <coordinates> marker in kmz content.")


def decode_kmz(
    kmz: str,
    name: str,
    *,
    bearing: float = 0.0,
    waypoint_radius: float = 2.0,
) -> DecodedFlightplan:
    """Build a flight plan from the coordinate path of a KMZ/KML document."""

    waypoints: List[Waypoint] = []
    for token in _coordinate_line(kmz).split():
        coordinates = token.split(",")
        if len(coordinates) != 3:
            raise ParseError(f"Waypoint with invalid number of coordinates encountered: \"{token}\".")
        try:
            longitude, latitude, altitude = (float(value) for value in coordinates)
        except ValueError as error:
            raise ParseError(f"Waypoint with invalid coordinates encountered: \"{token}\".") from error
        waypoints.append(Waypoint(latitude, longitude, altitude, bearing, waypoint_radius))

    if len(waypoints) < 2:
        raise ParseError("Less than two waypoints could be extracted from kmz content")

    LOGGER.debug("Decoded kmz path '%s' with %s waypoints", name, len(waypoints))
    return DecodedFlightplan(
        name=name or "",
        take_off_position=waypoints[0].clone(),
        touch_down_position=waypoints[-1].clone(),
        waypoints=waypoints,
    )
