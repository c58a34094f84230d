"""Core arithmetic shared by the aggregation stages.

Every ratio here has an explicit fallback for a zero denominator so that
NaN/Infinity never reach a presentation layer:

- calculate_share(): 0 when the total is 0.
- calculate_savings_rate(): 0 when income is 0.
- relative_variance(): None when the prior value is 0.
- percentage_point_difference(): plain subtraction, never undefined.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from cashe.core.models import Currency, Movement, MovementKind, PeriodSummary
from cashe.engine.currency import amount_in

HUNDRED = Decimal(100)


def calculate_share(amount: Decimal, total: Decimal) -> Decimal:
    """Calculate an amount's share of a total, in percent.

    Args:
        amount: Part amount.
        total: Whole amount.

    Returns:
        Percentage (25 = 25%), or 0 if the total is zero.
    """
    if total == 0:
        return Decimal(0)
    return amount / total * HUNDRED


def calculate_savings_rate(income: Decimal, expenses: Decimal) -> Decimal:
    """Calculate the savings rate: (income - expenses) / income * 100.

    Can be negative when expenses exceed income.

    Args:
        income: Total income.
        expenses: Total expenses (positive magnitude).

    Returns:
        Savings rate in percent, or 0 if there is no income.
    """
    if income <= 0:
        return Decimal(0)
    return (income - expenses) / income * HUNDRED


def relative_variance(current: Decimal, prior: Decimal) -> Decimal | None:
    """Calculate relative change from prior to current, in percent.

    The prior value's magnitude is used as the base so that a balance moving
    from -100 to -50 reads as +50% (an improvement).

    Args:
        current: Value for the current period.
        prior: Value for the prior period.

    Returns:
        Percent change, or None if the prior value is exactly zero.
    """
    if prior == 0:
        return None
    return (current - prior) / abs(prior) * HUNDRED


def percentage_point_difference(current_rate: Decimal, prior_rate: Decimal) -> Decimal:
    """Difference between two percentages, in percentage points.

    A savings rate going from 10% to 15% is +5 points (not +50%).
    """
    return current_rate - prior_rate


def summarize_period(
    movements: Iterable[Movement],
    currency: Currency | str = Currency.ARS,
) -> PeriodSummary:
    """Aggregate movements into income/expense totals.

    Transfers are counted but never added to income or expenses.

    Args:
        movements: Movements already restricted to the period.
        currency: Reporting currency.

    Returns:
        PeriodSummary with totals, balance and savings rate.
    """
    currency = Currency(currency)
    total_income = Decimal(0)
    total_expenses = Decimal(0)
    count = 0
    transfers = 0

    for m in movements:
        count += 1
        if m.kind == MovementKind.INCOME:
            total_income += amount_in(m, currency)
        elif m.kind == MovementKind.EXPENSE:
            total_expenses += amount_in(m, currency)
        else:
            transfers += 1

    return PeriodSummary(
        currency=currency,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        savings_rate=calculate_savings_rate(total_income, total_expenses),
        movement_count=count,
        transfer_count=transfers,
    )


def calculate_cumulative_balance(
    movements: Iterable[Movement],
    up_to_date: date,
    currency: Currency | str = Currency.ARS,
) -> Decimal:
    """Calculate income - expenses for all movements up to a date (inclusive).

    Transfers move money between accounts and do not change the balance.

    Args:
        movements: Movements to consider.
        up_to_date: End date (inclusive).
        currency: Reporting currency.

    Returns:
        Cumulative balance (positive = surplus, negative = deficit).
    """
    balance = Decimal(0)
    for m in movements:
        if m.date > up_to_date:
            continue
        if m.kind == MovementKind.INCOME:
            balance += amount_in(m, currency)
        elif m.kind == MovementKind.EXPENSE:
            balance -= amount_in(m, currency)
    return balance
