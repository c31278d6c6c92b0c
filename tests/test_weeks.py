"""Tests for filling sightings to whole weeks and paging them."""

from __future__ import annotations

import math
from datetime import date, timedelta

import pytest

from robin_sightings.analysis.dates import format_date, parse_date
from robin_sightings.analysis.weeks import (
    FillResult,
    fill_missing_dates,
    split_into_weeks,
    week_end,
    week_start,
)
from robin_sightings.errors import MalformedDate
from robin_sightings.schemas import DailyRecord


def _rec(day: str, count: int) -> DailyRecord:
    return DailyRecord(date=day, count=count)


def _daily_run(start: date, length: int) -> list[DailyRecord]:
    """Gap-free run of *length* records starting at *start*, counts 0..n-1."""
    return [_rec(format_date(start + timedelta(days=i)), i) for i in range(length)]


# Mixed starting weekdays, month/year boundaries and a leap day
START_DATES = [
    date(2025, 9, 29),  # Monday
    date(2025, 10, 1),  # Wednesday
    date(2025, 10, 5),  # Sunday
    date(2025, 12, 30),  # crosses into 2026
    date(2024, 2, 27),  # crosses 29 Feb
    date(2025, 3, 29),  # Saturday
]


class TestWeekBoundaries:
    """Test Monday/Sunday alignment helpers."""

    @pytest.mark.parametrize("offset", range(7))
    def test_week_start_is_monday_on_or_before(self, offset: int) -> None:
        monday = date(2025, 9, 29)
        day = monday + timedelta(days=offset)
        assert week_start(day) == monday

    @pytest.mark.parametrize("offset", range(7))
    def test_week_end_is_sunday_on_or_after(self, offset: int) -> None:
        monday = date(2025, 9, 29)
        day = monday + timedelta(days=offset)
        assert week_end(day) == date(2025, 10, 5)

    def test_sunday_steps_back_six_days(self) -> None:
        assert week_start(date(2025, 10, 5)) == date(2025, 9, 29)


class TestFillMissingDates:
    """Test gap filling and Monday-Sunday alignment."""

    def test_empty_input(self) -> None:
        result = fill_missing_dates([])
        assert result == FillResult()
        assert result.series == ()
        assert result.synthesized == frozenset()

    def test_fills_wednesday_and_friday_to_full_week(self) -> None:
        """Test two mid-week records expand to Monday 29/09 - Sunday 05/10."""
        result = fill_missing_dates([_rec("01/10/2025", 3), _rec("03/10/2025", 5)])

        assert result.dates == [
            "29/09/2025",
            "30/09/2025",
            "01/10/2025",
            "02/10/2025",
            "03/10/2025",
            "04/10/2025",
            "05/10/2025",
        ]
        assert result.synthesized == {
            "29/09/2025",
            "30/09/2025",
            "02/10/2025",
            "04/10/2025",
            "05/10/2025",
        }
        counts = {r.date: r.count for r in result.series}
        assert counts["01/10/2025"] == 3
        assert counts["03/10/2025"] == 5

    def test_synthesized_days_have_zero_count(self) -> None:
        result = fill_missing_dates([_rec("01/10/2025", 3), _rec("05/10/2025", 7)])
        filled = next(r for r in result.series if r.date == "03/10/2025")
        assert filled.count == 0
        assert "03/10/2025" in result.synthesized

    def test_observed_zero_is_not_synthesized(self) -> None:
        """Test a real zero count stays distinguishable from a gap."""
        result = fill_missing_dates([_rec("01/10/2025", 0)])
        assert "01/10/2025" not in result.synthesized
        assert len(result.synthesized) == 6

    def test_monday_record_has_no_backward_shift(self) -> None:
        result = fill_missing_dates([_rec("29/09/2025", 2)])
        assert result.series[0].date == "29/09/2025"
        assert result.series[-1].date == "05/10/2025"

    def test_sunday_record_has_no_forward_shift(self) -> None:
        result = fill_missing_dates([_rec("05/10/2025", 4)])
        assert result.series[0].date == "29/09/2025"
        assert result.series[-1].date == "05/10/2025"

    def test_sorts_unsorted_input(self) -> None:
        data = [_rec("03/10/2025", 5), _rec("01/10/2025", 3), _rec("02/10/2025", 4)]
        result = fill_missing_dates(data)
        observed = [r.date for r in result.series if r.date not in result.synthesized]
        assert observed == ["01/10/2025", "02/10/2025", "03/10/2025"]

    def test_does_not_mutate_input(self) -> None:
        data = [_rec("03/10/2025", 5), _rec("01/10/2025", 3)]
        snapshot = list(data)
        fill_missing_dates(data)
        assert data == snapshot

    def test_accepts_tuple_input(self) -> None:
        result = fill_missing_dates((_rec("01/10/2025", 1),))
        assert len(result.series) == 7

    def test_short_dates_are_canonicalised(self) -> None:
        result = fill_missing_dates([_rec("1/10/2025", 3)])
        counts = {r.date: r.count for r in result.series}
        assert counts["01/10/2025"] == 3
        assert "01/10/2025" not in result.synthesized

    def test_duplicate_dates_last_in_sort_order_wins(self) -> None:
        result = fill_missing_dates([_rec("01/10/2025", 3), _rec("01/10/2025", 9)])
        counts = {r.date: r.count for r in result.series}
        assert counts["01/10/2025"] == 9
        assert len(result.series) == 7

    def test_all_duplicates_is_not_an_error(self) -> None:
        result = fill_missing_dates([_rec("02/10/2025", 1)] * 4)
        assert len(result.series) == 7
        assert len(result.synthesized) == 6

    def test_spans_multiple_weeks(self) -> None:
        result = fill_missing_dates([_rec("01/10/2025", 1), _rec("15/10/2025", 2)])
        assert result.series[0].date == "29/09/2025"
        assert result.series[-1].date == "19/10/2025"
        assert len(result.series) == 21

    def test_crosses_year_boundary(self) -> None:
        result = fill_missing_dates([_rec("31/12/2025", 1), _rec("02/01/2026", 2)])
        assert result.series[0].date == "29/12/2025"
        assert result.series[-1].date == "04/01/2026"

    def test_malformed_date_propagates(self) -> None:
        """Test one bad date fails the whole batch."""
        with pytest.raises(MalformedDate):
            fill_missing_dates([_rec("01/10/2025", 1), _rec("not a date", 2)])

    def test_out_of_range_date_propagates(self) -> None:
        with pytest.raises(MalformedDate):
            fill_missing_dates([_rec("31/04/2025", 1)])

    @pytest.mark.parametrize("day", ["27/12/9999", "31/12/9999"])
    def test_week_past_last_date_is_malformed(self, day: str) -> None:
        with pytest.raises(MalformedDate, match="last supported date"):
            fill_missing_dates([_rec(day, 1)])

    def test_last_full_week_of_calendar(self) -> None:
        result = fill_missing_dates([_rec("26/12/9999", 1)])
        assert result.dates[0] == "20/12/9999"
        assert result.dates[-1] == "26/12/9999"


class TestFillProperties:
    """Invariants that hold for any input, checked over a spread of inputs."""

    @pytest.mark.parametrize("start", START_DATES)
    @pytest.mark.parametrize("length", [1, 2, 6, 7, 8, 13, 30])
    @pytest.mark.parametrize("stride", [1, 2, 5])
    def test_invariants(self, start: date, length: int, stride: int) -> None:
        records = [_rec(format_date(start + timedelta(days=i * stride)), i + 1) for i in range(length)]
        # Reverse so the filler has to sort
        result = fill_missing_dates(list(reversed(records)))
        days = [parse_date(r.date) for r in result.series]

        # Aligned to whole weeks
        assert days[0].weekday() == 0
        assert days[-1].weekday() == 6
        assert len(days) % 7 == 0

        # Strictly consecutive days
        assert all(b - a == timedelta(days=1) for a, b in zip(days, days[1:], strict=False))

        # Coverage: first Monday .. last Sunday inclusive
        first = parse_date(records[0].date)
        last = parse_date(records[-1].date)
        assert days[0] == week_start(first)
        assert days[-1] == week_end(last)
        assert len(days) == (days[-1] - days[0]).days + 1

        # Observed counts preserved, synthesized exactly the missing dates
        observed = {r.date: r.count for r in records}
        series_dates = {r.date for r in result.series}
        assert result.synthesized <= series_dates
        assert result.synthesized == series_dates - observed.keys()
        for record in result.series:
            if record.date in observed:
                assert record.count == observed[record.date]
            else:
                assert record.count == 0

    @pytest.mark.parametrize("start", [d for d in START_DATES if d.weekday() == 0])
    @pytest.mark.parametrize("weeks", [1, 2, 5])
    def test_filling_complete_weeks_is_idempotent(self, start: date, weeks: int) -> None:
        complete = _daily_run(start, weeks * 7)
        first = fill_missing_dates(complete)
        assert list(first.series) == complete
        assert first.synthesized == frozenset()
        assert fill_missing_dates(first.series) == first

    @pytest.mark.parametrize("start", START_DATES)
    def test_refilling_output_is_stable(self, start: date) -> None:
        """Test a filled series refills to itself, with the zeros now observed."""
        first = fill_missing_dates([_rec(format_date(start), 3)])
        second = fill_missing_dates(first.series)
        assert second.series == first.series
        assert second.synthesized == frozenset()


class TestSplitIntoWeeks:
    """Test paging a series seven records at a time."""

    def test_fourteen_records_make_two_full_weeks(self) -> None:
        weeks = split_into_weeks(_daily_run(date(2025, 10, 1), 14))
        assert [len(w) for w in weeks] == [7, 7]

    def test_partial_week_at_end(self) -> None:
        weeks = split_into_weeks(_daily_run(date(2025, 10, 1), 10))
        assert [len(w) for w in weeks] == [7, 3]

    def test_empty(self) -> None:
        assert split_into_weeks([]) == []

    def test_single_week(self) -> None:
        weeks = split_into_weeks(_daily_run(date(2025, 10, 1), 7))
        assert [len(w) for w in weeks] == [7]

    def test_less_than_a_week(self) -> None:
        weeks = split_into_weeks([_rec("01/10/2025", 1), _rec("02/10/2025", 2)])
        assert [len(w) for w in weeks] == [2]

    def test_preserves_order(self) -> None:
        data = [_rec(f"{i:02d}/10/2025", i) for i in range(1, 9)]
        weeks = split_into_weeks(data)
        assert weeks[0][0].count == 1
        assert weeks[0][6].count == 7
        assert weeks[1][0].count == 8

    def test_accepts_fill_result_series(self) -> None:
        result = fill_missing_dates([_rec("01/10/2025", 3), _rec("10/10/2025", 1)])
        weeks = split_into_weeks(result.series)
        assert [w[0].date for w in weeks] == ["29/09/2025", "06/10/2025"]
        assert all(isinstance(w, list) for w in weeks)

    def test_custom_size(self) -> None:
        weeks = split_into_weeks(_daily_run(date(2025, 10, 1), 5), size=2)
        assert [len(w) for w in weeks] == [2, 2, 1]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size: int) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            split_into_weeks(_daily_run(date(2025, 10, 1), 3), size=size)

    @pytest.mark.parametrize("n", [0, 1, 6, 7, 8, 13, 14, 15, 20, 21, 50])
    def test_sizing_and_reconstruction(self, n: int) -> None:
        series = _daily_run(date(2025, 1, 1), n)
        weeks = split_into_weeks(series)

        assert len(weeks) == math.ceil(n / 7)
        if n:
            assert all(len(w) == 7 for w in weeks[:-1])
            assert len(weeks[-1]) == (n % 7 or 7)
        assert [r for w in weeks for r in w] == series
