"""Exception hierarchy for robin sightings.

Everything the package raises on purpose derives from ``SightingsError`` so
callers at the edge (CLI, state container) can treat a failed batch as one
failure without catching unrelated bugs.
"""

from __future__ import annotations


class SightingsError(Exception):
    """Base class for all robin sightings errors."""


class MalformedDate(SightingsError, ValueError):  # noqa: N818
    """A date string is not three numeric ``DD/MM/YYYY`` fields."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed date {value!r}: {reason}")


class SightingsFetchError(SightingsError):
    """The sightings source could not be downloaded or was not JSON."""


class SightingsDecodeError(SightingsError):
    """The downloaded payload does not have the expected shape."""


class InvalidTransition(SightingsError):  # noqa: N818
    """A load-state transition was requested from the wrong state."""
