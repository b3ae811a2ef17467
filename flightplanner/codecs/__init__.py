"""Mini README: Text formats understood by the flight planner.

``mavlink`` reads and writes QGC WPL 120 files, ``kmz`` imports Google Earth
coordinate paths and ``json_document`` stores complete plans. Decoders return
a ``DecodedFlightplan`` which ``Flightplan`` loads in one step.
"""

from .document import DecodedFlightplan
from .json_document import decode_json, encode_json
from .kmz import decode_kmz
from .mavlink import decode_mavlink, encode_mavlink

__all__ = [
    "DecodedFlightplan",
    "decode_json",
    "decode_kmz",
    "decode_mavlink",
    "encode_json",
    "encode_mavlink",
]
