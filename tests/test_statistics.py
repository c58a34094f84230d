"""Tests for period statistics."""

from datetime import date
from decimal import Decimal

from cashe.core.models import DateRange, Movement, MovementKind
from cashe.engine.periods import month_range
from cashe.engine.statistics import (
    active_installments,
    daily_spending_stats,
    monthly_timeline,
    top_expenses,
    transfers,
)


def _expense(day: date, amount: str, **kwargs) -> Movement:
    return Movement(kind=MovementKind.EXPENSE, date=day, amount_primary=Decimal(amount), **kwargs)


def _income(day: date, amount: str) -> Movement:
    return Movement(kind=MovementKind.INCOME, date=day, amount_primary=Decimal(amount))


class TestDailySpendingStats:
    """Tests for daily_spending_stats function."""

    def test_average_over_all_days(self) -> None:
        """Test the average divides by every day in the range."""
        date_range = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 10))
        movements = [
            _expense(date(2024, 1, 2), "60"),
            _expense(date(2024, 1, 2), "40"),
            _expense(date(2024, 1, 5), "100"),
            _income(date(2024, 1, 3), "5000"),
        ]
        stats = daily_spending_stats(movements, date_range)
        assert stats.days_in_range == 10
        assert stats.daily_average == Decimal("20")
        assert stats.days_with_expenses == 2
        assert stats.days_without_expenses == 8

    def test_most_expensive_day_earliest_tie(self) -> None:
        """Test the earliest of equally expensive days wins."""
        movements = [_expense(date(2024, 1, 5), "100"), _expense(date(2024, 1, 2), "100")]
        stats = daily_spending_stats(movements, month_range(2024, 1))
        assert stats.most_expensive_day == date(2024, 1, 2)
        assert stats.most_expensive_day_total == Decimal("100")

    def test_no_expenses(self) -> None:
        """Test a range without spending."""
        stats = daily_spending_stats([], month_range(2024, 2))
        assert stats.days_in_range == 29
        assert stats.daily_average == Decimal(0)
        assert stats.most_expensive_day is None

    def test_unset_range(self) -> None:
        """Test an unset range yields empty statistics."""
        stats = daily_spending_stats([_expense(date(2024, 1, 5), "100")], DateRange())
        assert stats.days_in_range == 0


class TestMovementLists:
    """Tests for top_expenses, active_installments and transfers."""

    def test_top_expenses(self) -> None:
        """Test the largest expenses come first and the list is capped."""
        movements = [
            _expense(date(2024, 1, 1), "10"),
            _expense(date(2024, 1, 2), "300"),
            _expense(date(2024, 1, 3), "50"),
            _income(date(2024, 1, 4), "9999"),
        ]
        result = top_expenses(movements, limit=2)
        assert [m.amount_primary for m in result] == [Decimal("300"), Decimal("50")]

    def test_active_installments(self) -> None:
        """Test only installment expenses are listed."""
        movements = [
            _expense(date(2024, 1, 1), "10"),
            _expense(date(2024, 1, 2), "300", installment_id="tv", installment_label="2/6"),
        ]
        result = active_installments(movements)
        assert [m.installment_label for m in result] == ["2/6"]

    def test_transfers(self) -> None:
        """Test transfers are picked out in order."""
        transfer = Movement(
            kind=MovementKind.TRANSFER,
            date=date(2024, 1, 3),
            amount_primary=Decimal("100"),
            source_account="Bank",
            destination_account="Wallet",
        )
        assert transfers([_expense(date(2024, 1, 1), "10"), transfer]) == [transfer]


class TestMonthlyTimeline:
    """Tests for monthly_timeline function."""

    def test_clipped_months_and_running_balance(self) -> None:
        """Test one point per month, clipped, with a cumulative balance."""
        date_range = DateRange(start=date(2024, 1, 15), end=date(2024, 2, 10))
        movements = [
            _income(date(2024, 1, 10), "999"),  # before the range
            _income(date(2024, 1, 20), "1000"),
            _expense(date(2024, 1, 25), "400"),
            _expense(date(2024, 2, 5), "700"),
            _expense(date(2024, 2, 20), "999"),  # after the range
        ]
        timeline = monthly_timeline(movements, date_range)
        assert [p.period_label for p in timeline] == ["2024-01", "2024-02"]
        assert timeline[0].period_start == date(2024, 1, 15)
        assert timeline[1].period_end == date(2024, 2, 10)
        assert timeline[0].net_flow == Decimal("600")
        assert timeline[1].net_flow == Decimal("-700")
        assert timeline[1].cumulative_balance == Decimal("-100")

    def test_cumulative_balance_per_month_end(self) -> None:
        """Test each point carries the balance up to its month end, range only."""
        date_range = DateRange(start=date(2024, 1, 1), end=date(2024, 3, 31))
        movements = [
            _income(date(2023, 12, 31), "5000"),  # before the range
            _income(date(2024, 1, 1), "1000"),
            _expense(date(2024, 1, 31), "200"),
            _expense(date(2024, 3, 1), "300"),
        ]
        timeline = monthly_timeline(movements, date_range)
        assert [p.cumulative_balance for p in timeline] == [
            Decimal("800"),
            Decimal("800"),
            Decimal("500"),
        ]
        assert timeline[1].net_flow == Decimal(0)

    def test_unset_range(self) -> None:
        """Test an unset range has no timeline."""
        assert monthly_timeline([], DateRange()) == []
