"""Mini README: JSON document format for saving and restoring flight plans.

Structure:
    * WaypointDocument / PointOfInterestDocument / FlightplanDocument -
      Pydantic models describing the ``.flightplan.json`` layout.
    * encode_json - serialise a plan with 4-space indentation.
    * decode_json - validate a document and return a ``DecodedFlightplan``.

Points of interest are stored as ``{"lat": .., "lng": ..}`` so documents
written by earlier versions of the planner load unchanged. A stale mavlink
cache is written as ``null``; an empty string is read back as stale.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..errors import ParseError
from ..logging_utils import get_logger
from ..model.waypoint import PointOfInterest, Waypoint
from .document import DecodedFlightplan

if TYPE_CHECKING:
    from ..model.flightplan import Flightplan

LOGGER = get_logger(__name__)

INDENT = 4


class WaypointDocument(BaseModel):
    latitude: float
    longitude: float
    altitude: float
    orientation: float
    radius: float

    @classmethod
    def from_waypoint(cls, waypoint: Optional[Waypoint]) -> Optional["WaypointDocument"]:
        if waypoint is None:
            return None
        return cls(
            latitude=waypoint.latitude,
            longitude=waypoint.longitude,
            altitude=waypoint.altitude,
            orientation=waypoint.orientation,
            radius=waypoint.radius,
        )

    def to_waypoint(self) -> Waypoint:
        return Waypoint(self.latitude, self.longitude, self.altitude, self.orientation, self.radius)


class PointOfInterestDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lat: float
    lon: float = Field(validation_alias=AliasChoices("lng", "lon"), serialization_alias="lng")


class FlightplanDocument(BaseModel):
    """Top level ``.flightplan.json`` layout."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    mavlink: Optional[str] = None
    take_off_position: Optional[WaypointDocument] = Field(alias="takeOffPosition")
    touch_down_position: Optional[WaypointDocument] = Field(alias="touchDownPosition")
    waypoints: List[WaypointDocument]
    points_of_interest: List[PointOfInterestDocument] = Field(
        default_factory=list, alias="pointsOfInterest"
    )


def encode_json(plan: "Flightplan") -> str:
    """Serialise the plan, including points of interest and the mavlink cache."""

    document = FlightplanDocument(
        name=plan.name,
        mavlink=plan.mavlink,
        take_off_position=WaypointDocument.from_waypoint(plan.take_off_position),
        touch_down_position=WaypointDocument.from_waypoint(plan.touch_down_position),
        waypoints=[WaypointDocument.from_waypoint(waypoint) for waypoint in plan.waypoints],
        points_of_interest=[
            PointOfInterestDocument(lat=point.lat, lon=point.lon)
            for point in plan.points_of_interest
        ],
    )
    return json.dumps(document.model_dump(by_alias=True), indent=INDENT)


def decode_json(text: str) -> DecodedFlightplan:
    """Parse a JSON document. The plan's validity is left for the caller to check."""

    try:
        document = FlightplanDocument.model_validate(json.loads(text))
    except json.JSONDecodeError as error:
        raise ParseError(f"Flight plan document is not valid JSON: {error}") from error
    except ValidationError as error:
        raise ParseError(f"Flight plan document has an unexpected layout: {error}") from error

    LOGGER.debug(
        "Decoded JSON flight plan '%s' with %s waypoints", document.name, len(document.waypoints)
    )
    return DecodedFlightplan(
        name=document.name,
        mavlink=document.mavlink or None,
        take_off_position=(
            document.take_off_position.to_waypoint() if document.take_off_position else None
        ),
        touch_down_position=(
            document.touch_down_position.to_waypoint() if document.touch_down_position else None
        ),
        waypoints=[waypoint.to_waypoint() for waypoint in document.waypoints],
        points_of_interest=[
            PointOfInterest(lat=point.lat, lon=point.lon) for point in document.points_of_interest
        ],
    )
