"""Mini README: Reader and writer for QGC WPL 120 mavlink waypoint files.

Structure:
    * decode_mavlink - turn mavlink text into a ``DecodedFlightplan``.
    * encode_mavlink - render positions into mavlink text for the vehicle.

File layout::

    QGC WPL 120 <flight plan name>
    <seq>\\t0\\t3\\t<cmd>\\t<p1>\\t<p2>\\t<p3>\\t<p4>\\t<lat>\\t<lon>\\t<alt>\\t1

Only take-off (22), touch-down (21) and waypoint (16) commands carry plan
data; other commands are skipped. Lines containing ``//`` are comments and
lines without exactly 12 tab-separated fields are tolerated and skipped. A
12-field line that does not end in ``1`` is rejected.
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from ..errors import ParseError
from ..logging_utils import get_logger
from ..model.waypoint import Waypoint
from .document import DecodedFlightplan

LOGGER = get_logger(__name__)

HEADER_TOKEN = "QGC"
FORMAT_MARKER = "120"
HEADER_PREFIX = "QGC WPL 120"
COMMENT_TOKEN = "//"
FIELD_COUNT = 12

CMD_WAYPOINT = 16
CMD_LAND = 21
CMD_TAKEOFF = 22
CMD_CHANGE_SPEED = 178
CMD_IMAGE_START_CAPTURE = 2000
CMD_MOUNT_ORIENTATION = 2800

CAPTURE_INTERVAL_SECONDS = 1.0
CAMERA_PITCH = -90.0
CAMERA_MODE = 30.0
IMAGE_FORMAT = 0.000108

_INTEGER_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def _integer_prefix(token: str) -> Optional[int]:
    """Read the leading integer of a token, ``None`` if it has none."""

    match = _INTEGER_PREFIX.match(token)
    return int(match.group(1)) if match else None


def _number(token: str, line: str) -> float:
    try:
        return float(token)
    except ValueError as error:
        raise ParseError(f"Invalid number \"{token}\" in flight plan line: \"{line}\".") from error


def _position(entries: Sequence[str], line: str, radius: float) -> Waypoint:
    return Waypoint(
        latitude=_number(entries[8], line),
        longitude=_number(entries[9], line),
        altitude=_number(entries[10], line),
        orientation=_number(entries[7], line),
        radius=radius,
    )


def _parse_name(line: str) -> str:
    marker = line.find(FORMAT_MARKER)
    name = line[marker + len(FORMAT_MARKER):].strip() if marker != -1 else ""
    if not name:
        raise ParseError(
            "Invalid flight plan name. Check if \"QGC WPL 120 <name>\" is present in mavlink code."
        )
    return name


def decode_mavlink(text: str) -> DecodedFlightplan:
    """Parse mavlink text. The raw text is kept as the decoded mavlink cache."""

    lines = text.split("\n")
    if len(lines) < 3:
        raise ParseError("Invalid flight plan. Less than 3 mavlink statements could be parsed.")

    decoded = DecodedFlightplan(mavlink=text)
    for raw_line in lines:
        if HEADER_TOKEN in raw_line:
            decoded.name = _parse_name(raw_line)
            continue
        if COMMENT_TOKEN in raw_line:
            continue

        line = raw_line.strip()
        entries = line.split("\t")
        if len(entries) != FIELD_COUNT:
            continue
        if _integer_prefix(entries[11]) != 1:
            raise ParseError(f"Invalid flight plan line encountered. Line must end in \"1\": \"{line}\".")

        command = _integer_prefix(entries[3])
        if command == CMD_TAKEOFF:
            decoded.take_off_position = _position(entries, line, radius=0.0)
        elif command == CMD_LAND:
            decoded.touch_down_position = _position(entries, line, radius=0.0)
        elif command == CMD_WAYPOINT:
            decoded.waypoints.append(_position(entries, line, radius=_number(entries[5], line)))

    if not decoded.name:
        raise ParseError("Could not extract valid flight plan from passed mavlink code. No name found.")

    LOGGER.debug(
        "Decoded mavlink flight plan '%s' with %s waypoints", decoded.name, len(decoded.waypoints)
    )
    return decoded


def _fixed(value: float) -> str:
    return f"{value:.6f}"


def _row(sequence: int, command: int, params: Sequence[float], position: Sequence[float]) -> str:
    fields = [str(sequence), "0", "3", str(command)]
    fields.extend(_fixed(value) for value in params)
    fields.extend(_fixed(value) for value in position)
    fields.append("1")
    return "\t".join(fields)


def _coordinates(waypoint: Waypoint) -> List[float]:
    return [waypoint.latitude, waypoint.longitude, waypoint.altitude]


def encode_mavlink(
    name: str,
    take_off: Waypoint,
    waypoints: Sequence[Waypoint],
    touch_down: Waypoint,
    *,
    velocity: float = 2.0,
    hold_time: float = 1.0,
) -> str:
    """Render a flight plan as mavlink text.

    After take-off the vehicle sets its cruise speed, points the camera down
    and starts capturing. Every waypoint is followed by another capture
    command so recording resumes if the camera stopped.
    """

    no_position = [0.0, 0.0, 0.0]
    capture = [CAPTURE_INTERVAL_SECONDS, 0.0, IMAGE_FORMAT, 0.0]
    rows = [
        (CMD_TAKEOFF, [0.0, 0.0, 0.0, take_off.orientation], _coordinates(take_off)),
        (CMD_CHANGE_SPEED, [0.0, velocity, -1.0, 0.0], no_position),
        (CMD_MOUNT_ORIENTATION, [0.0, CAMERA_PITCH, 0.0, CAMERA_MODE], no_position),
        (CMD_IMAGE_START_CAPTURE, capture, no_position),
    ]
    for waypoint in waypoints:
        rows.append(
            (
                CMD_WAYPOINT,
                [hold_time, waypoint.radius, 0.0, waypoint.orientation],
                _coordinates(waypoint),
            )
        )
        rows.append((CMD_IMAGE_START_CAPTURE, capture, no_position))
    rows.append((CMD_LAND, [0.0, 0.0, 0.0, touch_down.orientation], _coordinates(touch_down)))

    lines = [f"{HEADER_PREFIX} {name}"]
    lines.extend(_row(sequence, command, params, position) for sequence, (command, params, position) in enumerate(rows))
    LOGGER.debug("Encoded mavlink flight plan '%s' with %s commands", name, len(rows))
    return "\n".join(lines) + "\n"
