"""Mini README: Operator edits shared by the CLI and the HTTP service.

Structure:
    * apply_edits - run the requested route edits in a fixed order.
    * summarise - plain dictionary describing a plan for display.

When densifying is requested without a step size, the configured
``default_step_size`` is used.

Edits run in the order an operator would apply them by hand: densify first,
then altitude, radius and a fixed bearing, and finally the bearing towards
the route centre (which overrides a fixed bearing on interior waypoints).
"""

from __future__ import annotations

from typing import Dict, Optional

from ..configuration import get_settings
from ..geodesy import path_length
from ..logging_utils import get_logger
from ..model import Flightplan

LOGGER = get_logger(__name__)


def apply_edits(
    plan: Flightplan,
    *,
    step_size: Optional[float] = None,
    densify: bool = False,
    altitude: Optional[float] = None,
    radius: Optional[float] = None,
    bearing: Optional[float] = None,
    bearing_to_center: bool = False,
) -> Flightplan:
    """Apply every requested edit to ``plan`` and return it."""

    if step_size is None and densify:
        step_size = get_settings().default_step_size
    if step_size is not None:
        plan.add_waypoints(step_size)
    if altitude is not None:
        plan.set_altitude(altitude)
    if radius is not None:
        plan.set_waypoint_radius(radius)
    if bearing is not None:
        plan.set_bearing(bearing)
    if bearing_to_center:
        plan.set_bearing_to_center()
    LOGGER.info(
        "Edited flight plan '%s': step_size=%s altitude=%s radius=%s bearing=%s to_center=%s",
        plan.name,
        step_size,
        altitude,
        radius,
        bearing,
        bearing_to_center,
    )
    return plan


def summarise(plan: Flightplan) -> Dict[str, object]:
    """Describe the plan for dashboards and terminal output."""

    # Geodesic distances are undefined for out-of-range coordinates.
    route_length = None
    if plan.is_valid:
        route_length = path_length(
            [plan.take_off_position, *plan.waypoints, plan.touch_down_position]
        )
    return {
        "name": plan.name,
        "valid": plan.is_valid,
        "waypoints": plan.num_waypoints,
        "points_of_interest": len(plan.points_of_interest),
        "route_length_m": route_length,
        "mavlink_cached": not plan.is_mavlink_stale,
    }
