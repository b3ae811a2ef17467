"""Mini README: Load and save flight plan files.

Structure:
    * read_kmz_text - text of a KML document, unpacking zipped KMZ archives.
    * load_flightplan - choose a decoder from the file suffix.
    * save_mavlink - write ``<name>.mavlink`` for the vehicle.
    * save_json - write ``<name>.flightplan.json`` for later editing.

Files are read completely before the text is handed to the ``Flightplan``;
the model itself never performs I/O.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Optional

from ..configuration import get_settings
from ..errors import InvalidArgumentError, ParseError, PreconditionViolationError
from ..logging_utils import get_logger
from ..model import Flightplan

LOGGER = get_logger(__name__)

MAVLINK_SUFFIXES = {".mavlink", ".waypoints", ".txt"}
JSON_SUFFIXES = {".json"}
KML_SUFFIXES = {".kml", ".kmz"}

MAVLINK_EXTENSION = ".mavlink"
JSON_EXTENSION = ".flightplan.json"


def _decode(content: bytes, path: Path) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as error:
        raise ParseError(f"Flight plan file {path} is not UTF-8 text") from error


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise ParseError(f"Flight plan file {path} is not UTF-8 text") from error


def read_kmz_text(path: Path) -> str:
    """Return the KML text of a ``.kmz`` archive or plain ``.kml`` file."""

    if zipfile.is_zipfile(path):
        with zipfile.ZipFile(path) as archive:
            members = [member for member in archive.namelist() if member.lower().endswith(".kml")]
            if not members:
                raise ParseError(f"KMZ archive {path} does not contain a .kml document")
            LOGGER.debug("Reading %s from KMZ archive %s", members[0], path)
            return _decode(archive.read(members[0]), path)
    return _read_text(path)


def _flightplan_stem(path: Path) -> str:
    name = path.name
    if name.lower().endswith(JSON_EXTENSION):
        return name[: -len(JSON_EXTENSION)]
    return path.stem


def load_flightplan(
    path: Path,
    *,
    name: Optional[str] = None,
    bearing: Optional[float] = None,
    waypoint_radius: Optional[float] = None,
) -> Flightplan:
    """Read a mavlink, JSON or KMZ/KML file into a new flight plan.

    ``name``, ``bearing`` and ``waypoint_radius`` only apply to KMZ/KML input,
    which carries none of them; they default to the file stem and the
    configured defaults.
    """

    path = Path(path)
    suffix = path.suffix.lower()
    plan = Flightplan()
    if suffix in MAVLINK_SUFFIXES:
        plan.parse_mavlink(_read_text(path))
    elif suffix in JSON_SUFFIXES:
        plan.from_json(_read_text(path))
    elif suffix in KML_SUFFIXES:
        settings = get_settings()
        plan.parse_kmz(
            read_kmz_text(path),
            name or _flightplan_stem(path),
            bearing=settings.default_bearing if bearing is None else bearing,
            waypoint_radius=(
                settings.default_waypoint_radius if waypoint_radius is None else waypoint_radius
            ),
        )
    else:
        raise InvalidArgumentError(
            f"Unsupported flight plan format: {suffix}. Supported: .mavlink, .waypoints, .txt, .json, .kml, .kmz"
        )
    LOGGER.info("Loaded flight plan '%s' from %s (%s waypoints)", plan.name, path, plan.num_waypoints)
    return plan


def _require_valid(plan: Flightplan) -> None:
    if not plan.is_valid:
        raise PreconditionViolationError("Only valid flight plans can be saved")


def _destination(directory: Path, name: str, extension: str) -> Path:
    """Place ``<name><extension>`` directly inside ``directory``."""

    if "/" in name or "\\" in name or name in {".", ".."}:
        raise InvalidArgumentError(f"Flight plan name '{name}' cannot be used as a file name")
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{name}{extension}"


def save_mavlink(
    plan: Flightplan,
    directory: Path,
    *,
    velocity: Optional[float] = None,
    hold_time: Optional[float] = None,
) -> Path:
    """Write the mavlink rendering, regenerating it first when stale."""

    _require_valid(plan)
    settings = get_settings()
    if plan.is_mavlink_stale or velocity is not None or hold_time is not None:
        plan.update_mavlink(
            velocity=settings.default_velocity if velocity is None else velocity,
            hold_time=settings.default_hold_time if hold_time is None else hold_time,
        )
    destination = _destination(directory, plan.name, MAVLINK_EXTENSION)
    destination.write_text(plan.mavlink, encoding="utf-8")
    LOGGER.info("Saved mavlink flight plan '%s' to %s", plan.name, destination)
    return destination


def save_json(plan: Flightplan, directory: Path) -> Path:
    """Write the JSON document next to other exported plans."""

    _require_valid(plan)
    destination = _destination(directory, plan.name, JSON_EXTENSION)
    destination.write_text(plan.to_json(), encoding="utf-8")
    LOGGER.info("Saved JSON flight plan '%s' to %s", plan.name, destination)
    return destination
