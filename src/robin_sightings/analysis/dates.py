"""Conversion between canonical ``DD/MM/YYYY`` strings and ``date`` values."""

from __future__ import annotations

from datetime import date

from robin_sightings.errors import MalformedDate

DATE_SEPARATOR = "/"


def parse_date(value: str) -> date:
    """
    Parse a ``D/M/YYYY`` or ``DD/MM/YYYY`` string into a ``date``.

    Args:
        value: Day, month and year as integers separated by ``/``.

    Returns:
        The calendar date.

    Raises:
        MalformedDate: Wrong number of fields, a non-numeric field, or a
            day/month that does not exist in the calendar (``31/04/2025``).
    """
    if not isinstance(value, str):
        raise MalformedDate(value, "expected a string")

    parts = value.split(DATE_SEPARATOR)
    if len(parts) != 3:
        raise MalformedDate(value, f"expected 3 fields, got {len(parts)}")

    fields: list[int] = []
    for part in parts:
        part = part.strip()
        if not (part.isascii() and part.isdigit()):
            raise MalformedDate(value, f"non-numeric field {part!r}")
        fields.append(int(part))

    day, month, year = fields
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDate(value, str(exc)) from exc


def format_date(value: date) -> str:
    """Render a date as zero-padded ``DD/MM/YYYY``."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def canonical(value: str) -> str:
    """Normalize a date string to its zero-padded form (``5/1/2025`` -> ``05/01/2025``)."""
    return format_date(parse_date(value))
