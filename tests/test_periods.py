"""Tests for date window helpers."""

from datetime import date
from decimal import Decimal

import pytest

from cashe.core.exceptions import InvalidPeriodError
from cashe.core.models import DateRange, Movement, MovementKind
from cashe.engine.periods import (
    add_months,
    filter_by_range,
    format_period,
    get_current_period,
    is_calendar_aligned,
    iterate_months,
    month_range,
    next_calendar_period,
    parse_date,
    parse_period,
    previous_calendar_period,
    prior_range,
)


def _expense(day: date) -> Movement:
    return Movement(kind=MovementKind.EXPENSE, date=day, amount_primary=Decimal("10"))


class TestDateRange:
    """Tests for the DateRange model."""

    def test_length_is_inclusive(self) -> None:
        """Test that both bounds count as days."""
        assert DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31)).length_days == 31
        assert DateRange(start=date(2024, 1, 1), end=date(2024, 1, 1)).length_days == 1

    def test_unset(self) -> None:
        """Test a range with a missing bound."""
        date_range = DateRange(start=date(2024, 1, 1))
        assert not date_range.is_set
        assert date_range.length_days == 0
        assert not date_range.contains(date(2024, 1, 1))

    def test_from_to_aliases(self) -> None:
        """Test that ranges load from {"from", "to"} payloads."""
        date_range = DateRange.model_validate({"from": "2024-01-01", "to": "2024-01-31"})
        assert date_range.start == date(2024, 1, 1)
        assert date_range.end == date(2024, 1, 31)


class TestFilterByRange:
    """Tests for filter_by_range function."""

    def test_bounds_inclusive(self) -> None:
        """Test that movements on the first and last day are kept."""
        movements = [
            _expense(date(2023, 12, 31)),
            _expense(date(2024, 1, 1)),
            _expense(date(2024, 1, 15)),
            _expense(date(2024, 1, 31)),
            _expense(date(2024, 2, 1)),
        ]
        result = filter_by_range(movements, month_range(2024, 1))
        assert [m.date for m in result] == [
            date(2024, 1, 1),
            date(2024, 1, 15),
            date(2024, 1, 31),
        ]

    def test_unset_range_selects_nothing(self) -> None:
        """Test that an unset range yields an empty list."""
        movements = [_expense(date(2024, 1, 15))]
        assert filter_by_range(movements, DateRange()) == []
        assert filter_by_range(movements, DateRange(end=date(2024, 1, 31))) == []

    def test_preserves_order(self) -> None:
        """Test that input order is kept (no sorting)."""
        movements = [_expense(date(2024, 1, 20)), _expense(date(2024, 1, 3))]
        result = filter_by_range(movements, month_range(2024, 1))
        assert [m.date for m in result] == [date(2024, 1, 20), date(2024, 1, 3)]


class TestPriorRange:
    """Tests for prior_range function."""

    def test_equal_length_and_contiguous(self) -> None:
        """Test the prior window has the same length and ends the day before."""
        current = DateRange(start=date(2024, 3, 10), end=date(2024, 3, 19))
        prior = prior_range(current)
        assert prior.length_days == current.length_days
        assert prior.end == date(2024, 3, 9)
        assert prior.start == date(2024, 2, 29)

    def test_full_month(self) -> None:
        """Test that a 31-day month maps to the 31 days before it."""
        prior = prior_range(month_range(2024, 1))
        assert prior == DateRange(start=date(2023, 12, 1), end=date(2023, 12, 31))

    def test_single_day(self) -> None:
        """Test a one-day window."""
        prior = prior_range(DateRange(start=date(2024, 1, 1), end=date(2024, 1, 1)))
        assert prior == DateRange(start=date(2023, 12, 31), end=date(2023, 12, 31))

    def test_unset(self) -> None:
        """Test that an unset range has no prior window."""
        assert prior_range(DateRange()) is None


class TestCalendarPeriods:
    """Tests for calendar-aligned neighbour periods."""

    def test_add_months_across_year(self) -> None:
        """Test month arithmetic wraps years."""
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 1)
        assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 1)

    def test_is_calendar_aligned(self) -> None:
        """Test detection of whole-month ranges."""
        assert is_calendar_aligned(month_range(2024, 2))
        assert not is_calendar_aligned(DateRange(start=date(2024, 2, 1), end=date(2024, 2, 28)))

    def test_previous_of_month_is_previous_month(self) -> None:
        """Test that March's previous period is all of February."""
        assert previous_calendar_period(month_range(2024, 3)) == month_range(2024, 2)

    def test_next_of_month_is_next_month(self) -> None:
        """Test that January's next period is all of February (leap year)."""
        assert next_calendar_period(month_range(2024, 1)) == DateRange(
            start=date(2024, 2, 1), end=date(2024, 2, 29)
        )

    def test_multi_month_shift(self) -> None:
        """Test that a quarter shifts by a full quarter."""
        quarter = DateRange(start=date(2024, 1, 1), end=date(2024, 3, 31))
        assert next_calendar_period(quarter) == DateRange(
            start=date(2024, 4, 1), end=date(2024, 6, 30)
        )

    def test_unaligned_falls_back_to_equal_length(self) -> None:
        """Test non-calendar ranges use equal-length neighbours."""
        current = DateRange(start=date(2024, 1, 10), end=date(2024, 1, 19))
        assert previous_calendar_period(current) == prior_range(current)
        assert next_calendar_period(current) == DateRange(
            start=date(2024, 1, 20), end=date(2024, 1, 29)
        )

    def test_iterate_months_clipped(self) -> None:
        """Test months are clipped to the range bounds."""
        months = list(iterate_months(DateRange(start=date(2024, 1, 15), end=date(2024, 3, 10))))
        assert months == [
            DateRange(start=date(2024, 1, 15), end=date(2024, 1, 31)),
            month_range(2024, 2),
            DateRange(start=date(2024, 3, 1), end=date(2024, 3, 10)),
        ]

    def test_current_period(self) -> None:
        """Test the current period is the month containing today."""
        assert get_current_period(date(2024, 5, 17)) == month_range(2024, 5)


class TestParsing:
    """Tests for period parsing and labels."""

    def test_parse_period(self) -> None:
        """Test YYYY-MM parsing."""
        assert parse_period("2024-02") == month_range(2024, 2)

    @pytest.mark.parametrize("value", ["2024", "2024-13", "jan-2024", "2024-01-01"])
    def test_parse_period_invalid(self, value: str) -> None:
        """Test invalid month labels are rejected."""
        with pytest.raises(InvalidPeriodError):
            parse_period(value)

    def test_parse_date_invalid(self) -> None:
        """Test invalid dates are rejected."""
        with pytest.raises(InvalidPeriodError):
            parse_date("2024-02-30")

    def test_format_period(self) -> None:
        """Test labels for months, arbitrary ranges and unset ranges."""
        assert format_period(month_range(2024, 1)) == "2024-01"
        assert (
            format_period(DateRange(start=date(2024, 1, 5), end=date(2024, 2, 4)))
            == "2024-01-05_2024-02-04"
        )
        assert format_period(DateRange()) == "no-range"
