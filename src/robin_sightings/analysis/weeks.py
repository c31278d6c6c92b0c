"""Week normalization and paging for daily sightings.

``fill_missing_dates`` turns a sparse, unsorted list of daily records into a
gap-free series running from a Monday to a Sunday, remembering which days were
invented. ``split_into_weeks`` then pages that series seven days at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING

from robin_sightings.analysis.dates import format_date, parse_date
from robin_sightings.errors import MalformedDate
from robin_sightings.schemas import DailyRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

DAYS_PER_WEEK = 7


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class FillResult:
    """A gap-free daily series plus the dates that were filled with zero."""

    series: tuple[DailyRecord, ...] = ()
    synthesized: frozenset[str] = field(default_factory=frozenset)

    @property
    def dates(self) -> list[str]:
        return [record.date for record in self.series]


# =============================================================================
# Week boundaries
# =============================================================================


def week_start(day: date) -> date:
    """Monday on or before *day*."""
    return day - timedelta(days=day.weekday())


def week_end(day: date) -> date:
    """Sunday on or after *day*.

    Raises:
        MalformedDate: That Sunday falls after ``date.max`` (late December 9999).
    """
    try:
        return day + timedelta(days=6 - day.weekday())
    except OverflowError as exc:
        raise MalformedDate(format_date(day), "week ends past the last supported date") from exc


# =============================================================================
# Filling and chunking
# =============================================================================


def fill_missing_dates(records: Sequence[DailyRecord]) -> FillResult:
    """
    Expand *records* to whole Monday-Sunday weeks with no missing days.

    Days with no record get a count of 0 and are listed in
    ``FillResult.synthesized``. When two records share a date, the one that
    sorts last wins; sorting is stable, so that is the later one in input order.

    Args:
        records: Daily records in any order. Not modified.

    Returns:
        FillResult with a chronological series and the synthesized dates.

    Raises:
        MalformedDate: Any record's date cannot be parsed. No partial result.
    """
    if not records:
        return FillResult()

    parsed = sorted(
        ((parse_date(record.date), record) for record in records),
        key=lambda pair: pair[0],
    )

    counts: dict[date, int] = {}
    for day, record in parsed:
        counts[day] = record.count

    start = week_start(parsed[0][0])
    end = week_end(parsed[-1][0])

    series: list[DailyRecord] = []
    synthesized: set[str] = set()
    day = start
    while day <= end:
        label = format_date(day)
        if day in counts:
            series.append(DailyRecord(date=label, count=counts[day]))
        else:
            series.append(DailyRecord(date=label, count=0))
            synthesized.add(label)
        day += timedelta(days=1)

    return FillResult(series=tuple(series), synthesized=frozenset(synthesized))


def split_into_weeks(
    series: Sequence[DailyRecord],
    size: int = DAYS_PER_WEEK,
) -> list[list[DailyRecord]]:
    """
    Split *series* into consecutive pages of *size* records.

    The last page holds the remainder and may be shorter. Order is preserved
    and every record lands in exactly one page.

    Raises:
        ValueError: If *size* is less than 1.
    """
    if size < 1:
        msg = f"Page size must be at least 1, got {size}"
        raise ValueError(msg)
    return [list(series[i : i + size]) for i in range(0, len(series), size)]
