"""Mini README: File storage helpers for flight plans.

Bridges files on disk and the in-memory ``Flightplan``. The ``files`` module
contains the loader dispatching on file suffix and the mavlink/JSON writers.
"""

from .files import load_flightplan, read_kmz_text, save_json, save_mavlink

__all__ = ["load_flightplan", "read_kmz_text", "save_json", "save_mavlink"]
