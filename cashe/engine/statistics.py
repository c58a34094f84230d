"""Descriptive statistics for a single period.

Daily spending figures, largest expenses, active installments and the
month-by-month timeline used by the report and the CLI.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from cashe.core.models import (
    Currency,
    DailySpendingStats,
    DateRange,
    Movement,
    MovementKind,
    PeriodDataPoint,
)
from cashe.engine.calculator import calculate_cumulative_balance, summarize_period
from cashe.engine.currency import amount_in
from cashe.engine.periods import filter_by_range, iterate_months


def daily_spending_stats(
    movements: Iterable[Movement],
    date_range: DateRange,
    currency: Currency | str = Currency.ARS,
) -> DailySpendingStats:
    """Calculate day-level spending figures for a range.

    The daily average divides by every day of the range, including days
    without expenses. The most expensive day is the earliest one among
    equal maxima.

    Args:
        movements: Movements (only expenses inside the range are used).
        date_range: Inclusive window.
        currency: Reporting currency.

    Returns:
        DailySpendingStats (all zero for an unset range).
    """
    if not date_range.is_set:
        return DailySpendingStats()

    by_day: dict[date, Decimal] = {}
    for m in filter_by_range(movements, date_range):
        if m.kind != MovementKind.EXPENSE:
            continue
        by_day[m.date] = by_day.get(m.date, Decimal(0)) + amount_in(m, currency)

    days = date_range.length_days
    total = sum(by_day.values(), Decimal(0))

    most_expensive_day: date | None = None
    most_expensive_total = Decimal(0)
    for day in sorted(by_day):
        if most_expensive_day is None or by_day[day] > most_expensive_total:
            most_expensive_day = day
            most_expensive_total = by_day[day]

    return DailySpendingStats(
        days_in_range=days,
        daily_average=total / days if days > 0 else Decimal(0),
        days_with_expenses=len(by_day),
        days_without_expenses=days - len(by_day),
        most_expensive_day=most_expensive_day,
        most_expensive_day_total=most_expensive_total,
    )


def top_expenses(
    movements: Iterable[Movement],
    limit: int = 5,
    currency: Currency | str = Currency.ARS,
) -> list[Movement]:
    """Return the largest expenses, biggest first (stable on ties)."""
    expenses = [m for m in movements if m.kind == MovementKind.EXPENSE]
    return sorted(expenses, key=lambda m: amount_in(m, currency), reverse=True)[:limit]


def active_installments(movements: Iterable[Movement]) -> list[Movement]:
    """Expenses that are one installment of a financed purchase."""
    return [m for m in movements if m.kind == MovementKind.EXPENSE and m.is_installment]


def transfers(movements: Iterable[Movement]) -> list[Movement]:
    """Transfers between accounts, in input order."""
    return [m for m in movements if m.kind == MovementKind.TRANSFER]


def monthly_timeline(
    movements: Iterable[Movement],
    date_range: DateRange,
    currency: Currency | str = Currency.ARS,
) -> list[PeriodDataPoint]:
    """Build one data point per calendar month touched by the range.

    Months are clipped to the range. The cumulative balance starts at zero
    at the beginning of the range.

    Args:
        movements: Movements to consider.
        date_range: Inclusive window.
        currency: Reporting currency.

    Returns:
        List of PeriodDataPoint in chronological order.
    """
    in_range = filter_by_range(movements, date_range)
    timeline: list[PeriodDataPoint] = []

    for month in iterate_months(date_range):
        summary = summarize_period(filter_by_range(in_range, month), currency)
        timeline.append(
            PeriodDataPoint(
                period_label=month.start.strftime("%Y-%m"),
                period_start=month.start,
                period_end=month.end,
                income=summary.total_income,
                expenses=summary.total_expenses,
                net_flow=summary.balance,
                cumulative_balance=calculate_cumulative_balance(in_range, month.end, currency),
            )
        )

    return timeline
