"""Mini README: Flight plan data model.

Exports the ``Waypoint`` and ``PointOfInterest`` value types, the
``Flightplan`` aggregate and the ``ChangeSignal`` channel the aggregate uses to
announce changes to whoever renders it.
"""

from .flightplan import Flightplan
from .signals import ChangeSignal
from .waypoint import PointOfInterest, Waypoint

__all__ = ["ChangeSignal", "Flightplan", "PointOfInterest", "Waypoint"]
