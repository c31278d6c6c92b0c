"""Date normalization and weekly bucketing for sightings.

Pure functions only: no I/O, no HTTP, no Prefect decorators.

Modules:
  - dates: parse_date, format_date (canonical DD/MM/YYYY strings)
  - weeks: fill_missing_dates, split_into_weeks, FillResult

Pipeline::

    records -> fill_missing_dates -> FillResult.series -> split_into_weeks -> pages
                                  -> FillResult.synthesized -> renderers ("no data")
"""

from robin_sightings.analysis.dates import canonical, format_date, parse_date
from robin_sightings.analysis.weeks import (
    DAYS_PER_WEEK,
    FillResult,
    fill_missing_dates,
    split_into_weeks,
    week_end,
    week_start,
)

__all__ = [
    "DAYS_PER_WEEK",
    "FillResult",
    "canonical",
    "fill_missing_dates",
    "format_date",
    "parse_date",
    "split_into_weeks",
    "week_end",
    "week_start",
]
