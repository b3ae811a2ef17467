"""Mini README: Exception hierarchy shared by the flight plan core.

Structure:
    * FlightplanError - common base so outer layers can catch every core error.
    * InvalidArgumentError - a required argument is missing or empty.
    * IndexOutOfRangeError - a waypoint or point of interest index is invalid.
    * PreconditionViolationError - the plan lacks the state an operation needs.
    * ParseError - mavlink, KMZ or JSON content could not be understood.

Each error also derives from the closest built-in exception so callers that
only know about ``ValueError`` or ``IndexError`` keep working.
"""

from __future__ import annotations


class FlightplanError(Exception):
    """Base class for all errors raised by the flight plan core."""


class InvalidArgumentError(FlightplanError, ValueError):
    """Raised when a required argument is absent or empty."""


class IndexOutOfRangeError(FlightplanError, IndexError):
    """Raised when an index does not address an existing element."""


class PreconditionViolationError(FlightplanError, RuntimeError):
    """Raised when the flight plan is not in a state that allows the operation."""


class ParseError(FlightplanError, ValueError):
    """Raised when flight plan content is malformed."""
