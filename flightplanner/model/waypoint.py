"""Mini README: Value types describing positions in a flight plan.

Structure:
    * Waypoint - position, altitude, orientation and acceptance radius.
    * PointOfInterest - latitude/longitude marker the operator wants to film.

Neither type validates on construction. ``Waypoint.is_valid`` is a query so
codecs can build a plan first and judge it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Waypoint:
    """Single waypoint of a flight plan.

    ``altitude`` is relative to the launch point, ``orientation`` is the
    heading in degrees and ``radius`` the distance in metres within which the
    waypoint counts as reached.
    """

    latitude: float
    longitude: float
    altitude: float
    orientation: float
    radius: float

    @property
    def is_valid(self) -> bool:
        """Check coordinate ranges, orientation and a non-negative radius."""

        return (
            -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
            and 0.0 <= self.orientation <= 360.0
            and self.radius >= 0.0
        )

    def clone(self) -> "Waypoint":
        """Return an independent copy with every field coerced to ``float``."""

        return Waypoint(
            latitude=float(self.latitude),
            longitude=float(self.longitude),
            altitude=float(self.altitude),
            orientation=float(self.orientation),
            radius=float(self.radius),
        )


@dataclass(slots=True)
class PointOfInterest:
    """Marker on the map that is not flown to."""

    lat: float
    lon: float

    def clone(self) -> "PointOfInterest":
        return PointOfInterest(lat=float(self.lat), lon=float(self.lon))
