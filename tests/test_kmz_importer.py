"""Mini README: Tests for the Google Earth coordinate path importer."""

from __future__ import annotations

import pytest

from flightplanner import Flightplan, ParseError, Waypoint

KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
<Placemark>
<LineString>
<coordinates>
8.0,47.0,5 8.001,47.001,6 8.002,47.002,7
</coordinates>
</LineString>
</Placemark>
</kml>
"""


def test_parse_kmz_builds_route_with_end_positions() -> None:
    plan = Flightplan()
    calls = []
    plan.on_change.subscribe(lambda: calls.append(True))

    plan.parse_kmz(KML, "route", bearing=0.0, waypoint_radius=2.0)

    assert plan.name == "route"
    assert plan.waypoints == [
        Waypoint(47.0, 8.0, 5.0, 0.0, 2.0),
        Waypoint(47.001, 8.001, 6.0, 0.0, 2.0),
        Waypoint(47.002, 8.002, 7.0, 0.0, 2.0),
    ]
    assert plan.take_off_position == plan.waypoints[0]
    assert plan.take_off_position is not plan.waypoints[0]
    assert plan.touch_down_position == plan.waypoints[-1]
    assert plan.touch_down_position is not plan.waypoints[-1]
    assert plan.is_valid
    assert plan.mavlink is None
    assert calls == [True]


def test_parse_kmz_tolerates_extra_whitespace() -> None:
    content = "<coordinates>\n\t 8.0,47.0,5   8.001,47.001,6 \t\n</coordinates>"
    plan = Flightplan()
    plan.parse_kmz(content, "spaced", bearing=45.0, waypoint_radius=1.0)
    assert plan.num_waypoints == 2
    assert plan.waypoints[1].orientation == 45.0


@pytest.mark.parametrize(
    "content",
    [
        "<coordinates>\n8.0,47.0 8.001,47.001,6\n",
        "<coordinates>\n8.0,47.0,5,1 8.001,47.001,6\n",
        "<coordinates>\n8.0,47.0,5\n",
        "<coordinates>\n8.0,north,5 8.001,47.001,6\n",
        "<Placemark>\n8.0,47.0,5 8.001,47.001,6\n",
        "line one\n<coordinates>",
    ],
)
def test_malformed_kmz_fails_and_clears(content: str) -> None:
    plan = Flightplan()
    plan.parse_kmz(KML, "route")
    calls = []
    plan.on_change.subscribe(lambda: calls.append(True))

    with pytest.raises(ParseError):
        plan.parse_kmz(content, "broken")

    assert calls == [True]
    assert plan.name == ""
    assert plan.waypoints == []
    assert plan.take_off_position is None


def test_empty_kmz_leaves_cleared_plan() -> None:
    plan = Flightplan()
    plan.parse_kmz(KML, "route")
    plan.parse_kmz("", "route")
    assert not plan.is_valid
    assert plan.waypoints == []
