"""Mini README: Tests for loading and saving flight plan files.

Uses pytest's ``tmp_path`` so nothing is written to the working tree.
"""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from flightplanner import (
    Flightplan,
    InvalidArgumentError,
    ParseError,
    PreconditionViolationError,
    Waypoint,
)
from flightplanner.storage import load_flightplan, read_kmz_text, save_json, save_mavlink

KML = "<kml>\n<coordinates>\n8.0,47.0,5 8.001,47.001,6 8.002,47.002,7\n</coordinates>\n</kml>\n"


def _survey_plan() -> Flightplan:
    plan = Flightplan()
    plan.set_name("meadow")
    plan.set_takeoff(Waypoint(47.0, 8.0, 0.0, 0.0, 0.0))
    plan.set_touchdown(Waypoint(47.002, 8.002, 0.0, 0.0, 0.0))
    plan.set_waypoints([Waypoint(47.001, 8.001, 30.0, 90.0, 2.0)])
    return plan


def test_save_and_load_mavlink(tmp_path: Path) -> None:
    plan = _survey_plan()
    destination = save_mavlink(plan, tmp_path / "out", velocity=3.0)

    assert destination == tmp_path / "out" / "meadow.mavlink"
    assert "\t178\t0.000000\t3.000000\t" in destination.read_text(encoding="utf-8")

    restored = load_flightplan(destination)
    assert restored.name == "meadow"
    assert restored.waypoints == plan.waypoints


def test_save_mavlink_keeps_fresh_cache(tmp_path: Path) -> None:
    plan = _survey_plan()
    text = plan.update_mavlink(velocity=4.0)
    destination = save_mavlink(plan, tmp_path)
    assert destination.read_text(encoding="utf-8") == text


def test_save_and_load_json(tmp_path: Path) -> None:
    plan = _survey_plan()
    destination = save_json(plan, tmp_path)

    assert destination.name == "meadow.flightplan.json"
    restored = load_flightplan(destination)
    assert restored.to_json() == plan.to_json()


def test_saving_invalid_plan_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(PreconditionViolationError):
        save_json(Flightplan(), tmp_path)
    with pytest.raises(PreconditionViolationError):
        save_mavlink(Flightplan(), tmp_path)
    assert list(tmp_path.iterdir()) == []


def test_load_kml_uses_file_stem_and_defaults(tmp_path: Path) -> None:
    path = tmp_path / "ridge.kml"
    path.write_text(KML, encoding="utf-8")

    plan = load_flightplan(path)

    assert plan.name == "ridge"
    assert plan.num_waypoints == 3
    assert plan.waypoints[0].radius == 2.0
    assert plan.waypoints[0].orientation == 0.0


def test_load_zipped_kmz(tmp_path: Path) -> None:
    path = tmp_path / "ridge.kmz"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("doc.kml", KML)

    assert read_kmz_text(path) == KML
    plan = load_flightplan(path, name="ridge north", bearing=90.0, waypoint_radius=5.0)
    assert plan.name == "ridge north"
    assert plan.waypoints[-1] == Waypoint(47.002, 8.002, 7.0, 90.0, 5.0)


def test_kmz_archive_without_kml_fails(tmp_path: Path) -> None:
    path = tmp_path / "empty.kmz"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("readme.txt", "nothing here")
    with pytest.raises(ParseError):
        load_flightplan(path)


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "plan.csv"
    path.write_text("lat,lon\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError):
        load_flightplan(path)


@pytest.mark.parametrize("name", ["north/field", "../escape", "..", "west\\field"])
def test_names_with_path_parts_are_not_saved(tmp_path: Path, name: str) -> None:
    plan = _survey_plan()
    plan.set_name(name)
    output_dir = tmp_path / "out"

    with pytest.raises(InvalidArgumentError):
        save_json(plan, output_dir)
    with pytest.raises(InvalidArgumentError):
        save_mavlink(plan, output_dir)
    assert list(tmp_path.rglob("*.mavlink")) == []
    assert list(tmp_path.rglob("*.json")) == []


@pytest.mark.parametrize("filename", ["plan.mavlink", "plan.flightplan.json", "plan.kml"])
def test_non_utf8_file_is_a_parse_error(tmp_path: Path, filename: str) -> None:
    path = tmp_path / filename
    path.write_bytes(b"\xff\xfe QGC WPL 120 plan\n")
    with pytest.raises(ParseError):
        load_flightplan(path)
