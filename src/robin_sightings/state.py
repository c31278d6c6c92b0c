"""Load and week-navigation state for the sightings chart.

``SightingsState`` is the single owner of what the UI shows: whether a load
is in progress, the current pages of weekly data, which dates are
placeholders, and which week is selected.

Transitions::

    idle ──start_loading──> loading ──load_succeeded──> ready
                               │                          │
                               └──load_failed──> failed   │
                                                   │      │
                    start_loading <────────────────┴──────┘

Every successful load replaces the previous pages wholesale and resets the
selection to the first week. A failed load discards them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from robin_sightings.analysis.weeks import fill_missing_dates, split_into_weeks
from robin_sightings.errors import InvalidTransition, SightingsError
from robin_sightings.schemas import DailyRecord, LoadStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


@dataclass
class SightingsState:
    """Current sightings pages plus the selected week."""

    status: LoadStatus = LoadStatus.IDLE
    weeks: list[list[DailyRecord]] = field(default_factory=list)
    synthesized: frozenset[str] = field(default_factory=frozenset)
    current_week: int = 0
    error: str | None = None

    # -------------------------------------------------------------------------
    # Load lifecycle
    # -------------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    def start_loading(self) -> None:
        """Enter ``loading`` from any state."""
        logger.debug("Sightings state {} -> loading", self.status)
        self.status = LoadStatus.LOADING
        self.error = None

    def load_succeeded(self, records: Sequence[DailyRecord]) -> None:
        """Replace the pages with freshly filled and split *records*.

        Raises:
            InvalidTransition: Not currently loading.
            MalformedDate: A record has an unparsable date. State is unchanged
                and the caller should report the load as failed.
        """
        self._require(LoadStatus.LOADING, "load_succeeded")
        result = fill_missing_dates(records)
        self.weeks = split_into_weeks(result.series)
        self.synthesized = result.synthesized
        self.current_week = 0
        self.status = LoadStatus.READY
        logger.debug(
            "Sightings ready: {} weeks, {} synthesized dates",
            len(self.weeks),
            len(self.synthesized),
        )

    def load_failed(self, message: str) -> None:
        """Discard all pages and record *message*.

        Raises:
            InvalidTransition: Not currently loading.
        """
        self._require(LoadStatus.LOADING, "load_failed")
        self.weeks = []
        self.synthesized = frozenset()
        self.current_week = 0
        self.error = message
        self.status = LoadStatus.FAILED
        logger.warning("Sightings load failed: {}", message)

    def load(self, fetcher: Callable[[], Sequence[DailyRecord]]) -> LoadStatus:
        """Run one full load with *fetcher* and return the resulting status.

        Any ``SightingsError`` from the fetcher or from filling marks the
        whole batch as failed. Other exceptions also mark it failed, then
        propagate.
        """
        self.start_loading()
        try:
            records = fetcher()
            self.load_succeeded(records)
        except SightingsError as exc:
            self.load_failed(str(exc))
        except Exception as exc:
            self.load_failed(str(exc) or type(exc).__name__)
            raise
        return self.status

    def _require(self, expected: LoadStatus, action: str) -> None:
        if self.status is not expected:
            msg = f"Cannot {action} while {self.status}"
            raise InvalidTransition(msg)

    # -------------------------------------------------------------------------
    # Week navigation
    # -------------------------------------------------------------------------

    @property
    def total_weeks(self) -> int:
        return len(self.weeks)

    @property
    def has_previous(self) -> bool:
        return self.current_week > 0

    @property
    def has_next(self) -> bool:
        return self.current_week < self.total_weeks - 1

    @property
    def current_records(self) -> list[DailyRecord]:
        """Records for the selected week, empty when there is no data."""
        if not self.weeks:
            return []
        return self.weeks[self.current_week]

    @property
    def week_label(self) -> str:
        return f"Week {self.current_week + 1}"

    def next_week(self) -> int:
        """Select the following week; stays put on the last one."""
        if self.has_next:
            self.current_week += 1
        return self.current_week

    def previous_week(self) -> int:
        """Select the preceding week; stays put on the first one."""
        if self.has_previous:
            self.current_week -= 1
        return self.current_week

    def go_to_week(self, index: int) -> int:
        """Select week *index* (0-based), clamped to the available range."""
        if not self.weeks:
            self.current_week = 0
        else:
            self.current_week = max(0, min(index, self.total_weeks - 1))
        return self.current_week
