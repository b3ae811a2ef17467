"""Mini README: Geodesic helpers used by route transformations.

Structure:
    * distance_meters - ellipsoidal distance between two positions, whole metres.
    * initial_bearing - great-circle bearing from one position to another.
    * center_of_bounds - centre of the bounding box spanned by positions.
    * path_length - summed leg distances along a sequence of positions.

Positions are any objects exposing ``latitude`` and ``longitude`` attributes,
so both waypoints and plain tuples wrapped in ``GeoPosition`` work.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

from geopy.distance import geodesic


class HasPosition(Protocol):
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class GeoPosition:
    """Bare latitude/longitude pair."""

    latitude: float
    longitude: float


def distance_meters(origin: HasPosition, target: HasPosition) -> int:
    """Return the WGS-84 geodesic distance rounded to the nearest metre."""

    meters = geodesic(
        (origin.latitude, origin.longitude), (target.latitude, target.longitude)
    ).meters
    return int(round(meters))


def initial_bearing(origin: HasPosition, target: HasPosition) -> float:
    """Return the initial great-circle bearing in degrees within [0, 360)."""

    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    delta_lon = math.radians(target.longitude - origin.longitude)

    y = math.sin(delta_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(delta_lon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def center_of_bounds(positions: Iterable[HasPosition]) -> GeoPosition:
    """Return the centre of the latitude/longitude bounding box."""

    points = list(positions)
    if not points:
        raise ValueError("At least one position is required to compute a centre")
    latitudes = [point.latitude for point in points]
    longitudes = [point.longitude for point in points]
    return GeoPosition(
        latitude=(min(latitudes) + max(latitudes)) / 2,
        longitude=(min(longitudes) + max(longitudes)) / 2,
    )


def path_length(positions: Sequence[HasPosition]) -> int:
    """Sum the rounded leg distances of an ordered path."""

    return sum(
        distance_meters(positions[index], positions[index + 1])
        for index in range(len(positions) - 1)
    )
