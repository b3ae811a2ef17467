"""Mini README: Intermediate result shared by the flight plan decoders.

Decoders never touch a ``Flightplan`` directly. They return a
``DecodedFlightplan`` that the plan swaps in as a whole, which keeps a failed
parse from leaving half-populated state behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..model.waypoint import PointOfInterest, Waypoint


@dataclass(slots=True)
class DecodedFlightplan:
    """Everything needed to populate a flight plan."""

    name: str = ""
    take_off_position: Optional[Waypoint] = None
    touch_down_position: Optional[Waypoint] = None
    waypoints: List[Waypoint] = field(default_factory=list)
    points_of_interest: List[PointOfInterest] = field(default_factory=list)
    mavlink: Optional[str] = None
