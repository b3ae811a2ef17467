"""Mini README: Flight plan aggregate and its transformation operations.

Structure:
    * Flightplan - take-off and touch-down positions, the interior route,
      points of interest, a cached mavlink rendering and change signals.

Lifecycle:
    A new instance is cleared (and therefore invalid). Parsing mavlink, KMZ or
    JSON content always clears first and then populates; any failure clears
    again, emits ``on_change`` and re-raises. Mutators validate their
    arguments before touching state, so a failed call leaves the plan as it
    was. The mavlink cache is ``None`` whenever it is stale.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, List, Optional

import numpy as np

from ..errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    ParseError,
    PreconditionViolationError,
)
from ..geodesy import center_of_bounds, distance_meters, initial_bearing
from ..logging_utils import get_logger
from .signals import ChangeSignal
from .waypoint import PointOfInterest, Waypoint

if TYPE_CHECKING:
    from ..codecs.document import DecodedFlightplan

LOGGER = get_logger(__name__)

DEFAULT_VELOCITY = 2.0
DEFAULT_HOLD_TIME = 1.0


class Flightplan:
    """A survey flight plan that can be rebuilt entirely from its mavlink form."""

    def __init__(self, mavlink: Optional[str] = None) -> None:
        self.on_change = ChangeSignal("change")
        self.name_changed = ChangeSignal("name")
        self.mavlink_changed = ChangeSignal("mavlink")
        self.takeoff_changed = ChangeSignal("takeoff")
        self.touchdown_changed = ChangeSignal("touchdown")
        self.waypoints_changed = ChangeSignal("waypoints")
        self.points_of_interest_changed = ChangeSignal("points_of_interest")

        self._name = ""
        self._mavlink: Optional[str] = None
        self._take_off_position: Optional[Waypoint] = None
        self._touch_down_position: Optional[Waypoint] = None
        self._waypoints: List[Waypoint] = []
        self._points_of_interest: List[PointOfInterest] = []

        if mavlink:
            self.parse_mavlink(mavlink)

    # ------------------------------------------------------------------ state

    @property
    def name(self) -> str:
        return self._name

    @property
    def mavlink(self) -> Optional[str]:
        """Cached mavlink text, or ``None`` if it has to be regenerated."""

        return self._mavlink

    @property
    def is_mavlink_stale(self) -> bool:
        return self._mavlink is None

    @property
    def take_off_position(self) -> Optional[Waypoint]:
        return self._take_off_position

    @property
    def touch_down_position(self) -> Optional[Waypoint]:
        return self._touch_down_position

    @property
    def waypoints(self) -> List[Waypoint]:
        """Interior route, excluding take-off and touch-down."""

        return self._waypoints

    @property
    def num_waypoints(self) -> int:
        return len(self._waypoints)

    @property
    def points_of_interest(self) -> List[PointOfInterest]:
        return self._points_of_interest

    @property
    def is_valid(self) -> bool:
        """True when both end positions, the name and every waypoint are valid.

        An empty interior route is accepted; a cleared plan never is.
        """

        if self._take_off_position is None or not self._take_off_position.is_valid:
            return False
        if self._touch_down_position is None or not self._touch_down_position.is_valid:
            return False
        if not self._name:
            return False
        return all(waypoint.is_valid for waypoint in self._waypoints)

    def _reset(self) -> None:
        self._name = ""
        self._mavlink = None
        self._take_off_position = None
        self._touch_down_position = None
        self._waypoints = []
        self._points_of_interest = []

    def clear(self) -> None:
        """Drop all data. The plan is invalid afterwards."""

        self._reset()
        self.on_change.emit()

    def _require_end_positions(self, operation: str) -> None:
        if self._take_off_position is None or self._touch_down_position is None:
            raise PreconditionViolationError(
                f"Cannot {operation}: take-off and touch-down positions are required"
            )

    # --------------------------------------------------------------- mutators

    def set_name(self, name: str) -> None:
        if not name or not name.strip():
            raise InvalidArgumentError("Flight plan name must not be empty")
        self._name = name.strip()
        self._mavlink = None
        self.name_changed.emit(self._name)

    def set_waypoints(self, route: Optional[Iterable[Waypoint]]) -> None:
        """Replace the interior route. Erases the cached mavlink text."""

        waypoints = list(route) if route is not None else []
        if not waypoints:
            raise InvalidArgumentError("Invalid waypoint data passed to set_waypoints()")
        self._mavlink = None
        self._waypoints = waypoints
        self.waypoints_changed.emit(self._waypoints)

    def set_waypoint(self, waypoint: Waypoint, index: int) -> None:
        """Replace one interior waypoint with a clone of ``waypoint``.

        The mavlink cache is left untouched here, unlike every other
        position mutator.
        """

        if not 0 <= index < len(self._waypoints):
            raise IndexOutOfRangeError(f"Invalid waypoint index {index} passed to set_waypoint()")
        if waypoint is None:
            raise InvalidArgumentError("Invalid waypoint passed to set_waypoint()")
        self._waypoints[index] = waypoint.clone()
        self.waypoints_changed.emit(self._waypoints)

    def set_takeoff(self, position: Optional[Waypoint]) -> None:
        if position is None:
            raise InvalidArgumentError("Invalid take-off data passed to set_takeoff()")
        self._mavlink = None
        self._take_off_position = position
        self.takeoff_changed.emit(self._take_off_position)

    def set_touchdown(self, position: Optional[Waypoint]) -> None:
        if position is None:
            raise InvalidArgumentError("Invalid touch-down data passed to set_touchdown()")
        self._mavlink = None
        self._touch_down_position = position
        self.touchdown_changed.emit(self._touch_down_position)

    def _all_positions(self) -> List[Waypoint]:
        return [self._take_off_position, *self._waypoints, self._touch_down_position]

    def set_waypoint_radius(self, radius: float) -> None:
        """Set the acceptance radius of every waypoint, end positions included."""

        self._require_end_positions("set waypoint radius")
        for waypoint in self._all_positions():
            waypoint.radius = radius
        self._mavlink = None
        self.on_change.emit()

    def set_altitude(self, altitude: float) -> None:
        """Fly the whole plan at one altitude."""

        self._require_end_positions("set altitude")
        for waypoint in self._all_positions():
            waypoint.altitude = altitude
        self._mavlink = None
        self.on_change.emit()

    def set_bearing(self, bearing: float) -> None:
        """Face every waypoint, end positions included, in one direction."""

        self._require_end_positions("set bearing")
        for waypoint in self._all_positions():
            waypoint.orientation = bearing
        self._mavlink = None
        self.on_change.emit()

    def set_bearing_to_center(self) -> None:
        """Point each interior waypoint at the centre of the route's bounding box."""

        if not self._waypoints:
            raise PreconditionViolationError("Cannot set bearing to center without waypoints")
        center = center_of_bounds(self._waypoints)
        LOGGER.debug("Orienting %s waypoints towards %s", len(self._waypoints), center)
        for waypoint in self._waypoints:
            waypoint.orientation = initial_bearing(waypoint, center)
        self._mavlink = None
        self.on_change.emit()

    def add_waypoints(self, step_size: float) -> None:
        """Insert interpolated waypoints every ``step_size`` metres.

        Latitude, longitude and altitude are interpolated linearly along each
        leg; orientation and radius are taken from the leg's first waypoint.
        The first and last waypoints of the route are kept as they are.
        """

        if self.num_waypoints < 2:
            raise PreconditionViolationError(
                "Error adding waypoints. Flight path needs to have at least 2 waypoints."
            )
        if not all(waypoint.is_valid for waypoint in self._waypoints):
            raise PreconditionViolationError(
                "Error adding waypoints. Flight path contains invalid waypoints."
            )
        if not step_size > 0:
            raise InvalidArgumentError(f"Step size must be a positive distance, got {step_size}")

        original = [waypoint.clone() for waypoint in self._waypoints]
        densified: List[Waypoint] = []
        for start, end in zip(original, original[1:]):
            distance = distance_meters(start, end)
            num_steps = math.floor(distance / step_size)
            densified.append(start)
            if num_steps > 1:
                steps = np.arange(1, num_steps)
                latitudes = start.latitude + steps * ((end.latitude - start.latitude) / num_steps)
                longitudes = start.longitude + steps * ((end.longitude - start.longitude) / num_steps)
                altitudes = start.altitude + steps * ((end.altitude - start.altitude) / num_steps)
                for latitude, longitude, altitude in zip(latitudes, longitudes, altitudes):
                    densified.append(
                        Waypoint(
                            latitude=float(latitude),
                            longitude=float(longitude),
                            altitude=float(altitude),
                            orientation=start.orientation,
                            radius=start.radius,
                        )
                    )
        densified.append(original[-1])

        LOGGER.debug(
            "Densified route from %s to %s waypoints (step %s m)",
            len(original),
            len(densified),
            step_size,
        )
        self._waypoints = densified
        self._mavlink = None
        self.waypoints_changed.emit(self._waypoints)

    def add_point_of_interest(self, point: Optional[PointOfInterest]) -> None:
        if point is None:
            raise InvalidArgumentError("Invalid point of interest passed to add_point_of_interest()")
        self._points_of_interest.append(point)
        self.points_of_interest_changed.emit(self._points_of_interest)

    def remove_point_of_interest(self, index: int) -> None:
        if not 0 <= index < len(self._points_of_interest):
            raise IndexOutOfRangeError(
                f"Invalid point of interest index {index} passed to remove_point_of_interest()"
            )
        del self._points_of_interest[index]
        self.points_of_interest_changed.emit(self._points_of_interest)

    def set_point_of_interest(self, point: Optional[PointOfInterest], index: int) -> None:
        """Replace a point of interest with a copy of ``point``."""

        if point is None:
            raise InvalidArgumentError("Invalid point of interest passed to set_point_of_interest()")
        if not 0 <= index < len(self._points_of_interest):
            raise IndexOutOfRangeError(
                f"Invalid point of interest index {index} passed to set_point_of_interest()"
            )
        self._points_of_interest[index] = point.clone()
        self.points_of_interest_changed.emit(self._points_of_interest)

    # ----------------------------------------------------------------- codecs

    def update_mavlink(
        self, velocity: float = DEFAULT_VELOCITY, hold_time: float = DEFAULT_HOLD_TIME
    ) -> str:
        """Regenerate the mavlink text from the current positions and return it."""

        from ..codecs.mavlink import encode_mavlink

        if self._take_off_position is None or self._touch_down_position is None or not self._waypoints:
            raise PreconditionViolationError(
                "Flight path has invalid positions. Cannot write flight plan."
            )
        self._mavlink = encode_mavlink(
            self._name,
            self._take_off_position,
            self._waypoints,
            self._touch_down_position,
            velocity=velocity,
            hold_time=hold_time,
        )
        self.mavlink_changed.emit(self._mavlink)
        return self._mavlink

    def _load(self, decoded: "DecodedFlightplan") -> None:
        self._name = decoded.name
        self._mavlink = decoded.mavlink
        self._take_off_position = decoded.take_off_position
        self._touch_down_position = decoded.touch_down_position
        self._waypoints = list(decoded.waypoints)
        self._points_of_interest = list(decoded.points_of_interest)

    def _fail_parse(self) -> None:
        self._reset()
        self.on_change.emit()

    def parse_mavlink(self, text: str) -> None:
        """Rebuild the plan from QGC WPL 120 text.

        Empty text leaves a cleared plan. Malformed or invalid content clears
        the plan and raises :class:`~flightplanner.errors.ParseError`.
        """

        from ..codecs.mavlink import decode_mavlink

        self._reset()
        if not text:
            return
        try:
            self._load(decode_mavlink(text))
            if not self.is_valid:
                raise ParseError("Could not extract valid flight plan from passed mavlink code.")
        except Exception:
            LOGGER.debug("Mavlink parsing failed, plan cleared")
            self._fail_parse()
            raise
        self.on_change.emit()

    def parse_kmz(
        self,
        kmz: str,
        name: str,
        bearing: float = 0.0,
        waypoint_radius: float = 2.0,
    ) -> None:
        """Load the coordinate path of a Google Earth export.

        The first coordinate doubles as take-off, the last as touch-down.
        """

        from ..codecs.kmz import decode_kmz

        self._reset()
        if not kmz:
            return
        try:
            self._load(decode_kmz(kmz, name, bearing=bearing, waypoint_radius=waypoint_radius))
        except Exception:
            LOGGER.debug("KMZ parsing failed, plan cleared")
            self._fail_parse()
            raise
        self.on_change.emit()

    def to_json(self) -> str:
        from ..codecs.json_document import encode_json

        return encode_json(self)

    def from_json(self, document: str) -> None:
        """Replace the plan with a JSON document. Validity is not checked."""

        from ..codecs.json_document import decode_json

        self._reset()
        try:
            self._load(decode_json(document))
        except Exception:
            LOGGER.debug("JSON parsing failed, plan cleared")
            self._fail_parse()
            raise
        self.on_change.emit()

    def __repr__(self) -> str:
        return (
            f"Flightplan(name={self._name!r}, waypoints={len(self._waypoints)}, "
            f"valid={self.is_valid})"
        )
