"""Mini README: Tests for the FastAPI service.

Exercises uploads, mavlink export and edits through ``TestClient``.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from flightplanner import Flightplan, Waypoint
from flightplanner.interface import create_application

MAVLINK = (
    "QGC WPL 120 test\n"
    "0\t0\t3\t22\t0\t0\t0\t10\t47.0\t8.0\t5\t1\n"
    "1\t0\t3\t16\t1\t2\t0\t20\t47.001\t8.001\t6\t1\n"
    "2\t0\t3\t21\t0\t0\t0\t30\t47.002\t8.002\t7\t1\n"
)
KML = "<coordinates>\n8.0,47.0,5 8.001,47.001,6 8.002,47.002,7\n"


def _client() -> TestClient:
    return TestClient(create_application())


def _document() -> str:
    return Flightplan(MAVLINK).to_json()


def test_health() -> None:
    response = _client().get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_mavlink_upload_returns_document() -> None:
    response = _client().post(
        "/flightplans/mavlink", files={"mavlink": ("test.mavlink", MAVLINK, "text/plain")}
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["summary"]["valid"] is True
    assert payload["flightplan"]["name"] == "test"
    assert payload["flightplan"]["waypoints"][0]["radius"] == 2.0


def test_broken_mavlink_upload_is_rejected() -> None:
    response = _client().post(
        "/flightplans/mavlink",
        files={"mavlink": ("test.mavlink", MAVLINK.replace("6\t1\n", "6\t0\n"), "text/plain")},
    )
    assert response.status_code == 400
    assert "must end" in response.json()["detail"]


def test_kmz_upload_uses_form_values() -> None:
    response = _client().post(
        "/flightplans/kmz",
        files={"kmz": ("route.kml", KML, "application/vnd.google-earth.kml+xml")},
        data={"name": "route", "bearing": "90", "radius": "3"},
    )
    assert response.status_code == 200
    waypoints = response.json()["flightplan"]["waypoints"]
    assert len(waypoints) == 3
    assert waypoints[0]["orientation"] == 90.0
    assert waypoints[0]["radius"] == 3.0


def test_export_mavlink_renders_document() -> None:
    response = _client().post(
        "/flightplans/export/mavlink", data={"document": _document(), "velocity": "4"}
    )
    assert response.status_code == 200
    assert response.text.startswith("QGC WPL 120 test\n")
    assert "\t178\t0.000000\t4.000000\t" in response.text
    assert 'filename="test.mavlink"' in response.headers["content-disposition"]


def test_transform_applies_edits() -> None:
    response = _client().post(
        "/flightplans/transform",
        data={"document": _document(), "altitude": "42", "bearing": "180"},
    )
    assert response.status_code == 200
    flightplan = response.json()["flightplan"]
    assert flightplan["mavlink"] is None
    assert all(waypoint["altitude"] == 42.0 for waypoint in flightplan["waypoints"])
    assert flightplan["takeOffPosition"]["orientation"] == 180.0


def test_transform_rejects_impossible_edit() -> None:
    response = _client().post(
        "/flightplans/transform", data={"document": _document(), "step_size": "10"}
    )
    assert response.status_code == 400


def test_invalid_document_is_rejected() -> None:
    response = _client().post("/flightplans/transform", data={"document": "{}"})
    assert response.status_code == 400
    assert "unexpected layout" in response.json()["detail"]


def _invalid_document() -> str:
    plan = Flightplan(MAVLINK)
    plan.set_waypoints(
        [Waypoint(120.0, 8.0, 20.0, 0.0, 2.0), Waypoint(47.001, 8.001, 20.0, 0.0, 2.0)]
    )
    return plan.to_json()


def test_transform_of_invalid_plan_reports_it() -> None:
    response = _client().post(
        "/flightplans/transform", data={"document": _invalid_document(), "altitude": "10"}
    )
    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["valid"] is False
    assert summary["route_length_m"] is None


def test_densifying_invalid_plan_is_rejected() -> None:
    response = _client().post(
        "/flightplans/transform", data={"document": _invalid_document(), "densify": "true"}
    )
    assert response.status_code == 400
    assert "invalid waypoints" in response.json()["detail"]


@pytest.mark.parametrize("route, field", [("/flightplans/mavlink", "mavlink"), ("/flightplans/kmz", "kmz")])
def test_non_utf8_upload_is_rejected(route: str, field: str) -> None:
    response = _client().post(
        route,
        files={field: ("binary.bin", b"\xff\xfe QGC", "application/octet-stream")},
        data={"name": "binary"},
    )
    assert response.status_code == 400
    assert "not UTF-8" in response.json()["detail"]
