"""Period-over-period comparison.

The current window is compared with the window of equal length that ends
the day before it starts. Current totals honour the caller's display
filters; prior totals are always computed from the full movement set so the
baseline reflects overall history, not the current selection.
"""

from collections.abc import Iterable
from decimal import Decimal

from cashe.core.models import (
    Currency,
    DateRange,
    Movement,
    PeriodComparison,
    PeriodSummary,
    PriorPeriodComparison,
    RateComparison,
)
from cashe.engine.calculator import (
    percentage_point_difference,
    relative_variance,
    summarize_period,
)
from cashe.engine.filters import MovementFilters
from cashe.engine.periods import filter_by_range, prior_range


def compare_values(current: Decimal, prior: Decimal) -> PeriodComparison:
    """Build a PeriodComparison using relative variance."""
    return PeriodComparison(
        current_total=current,
        prior_total=prior,
        variance_percent=relative_variance(current, prior),
    )


def compare_rates(current_rate: Decimal, prior_rate: Decimal) -> RateComparison:
    """Build a RateComparison using the percentage-point difference."""
    return RateComparison(
        current_rate=current_rate,
        prior_rate=prior_rate,
        point_difference=percentage_point_difference(current_rate, prior_rate),
    )


def compare_summaries(
    current: PeriodSummary,
    prior: PeriodSummary,
    current_range: DateRange,
    prior_window: DateRange | None,
) -> PriorPeriodComparison:
    """Compare two already computed period summaries."""
    return PriorPeriodComparison(
        current_range=current_range,
        prior_range=prior_window,
        income=compare_values(current.total_income, prior.total_income),
        expense=compare_values(current.total_expenses, prior.total_expenses),
        balance=compare_values(current.balance, prior.balance),
        savings_rate=compare_rates(current.savings_rate, prior.savings_rate),
    )


def compare_to_prior_period(
    all_movements: Iterable[Movement],
    current_range: DateRange,
    currency: Currency | str = Currency.ARS,
    filters: MovementFilters | None = None,
) -> PriorPeriodComparison:
    """Compare a range with the equally long range right before it.

    Args:
        all_movements: Full, unfiltered movement history.
        current_range: Range being displayed.
        currency: Reporting currency.
        filters: Display filters, applied to the current range only.

    Returns:
        Income, expense and balance comparisons (relative variance, None
        when the prior value is zero) and the savings rate comparison
        (percentage points).
    """
    all_movements = list(all_movements)
    currency = Currency(currency)

    current = filter_by_range(all_movements, current_range)
    if filters is not None:
        current = filters.apply(current)

    prior_window = prior_range(current_range)
    prior = filter_by_range(all_movements, prior_window) if prior_window else []

    return compare_summaries(
        current=summarize_period(current, currency),
        prior=summarize_period(prior, currency),
        current_range=current_range,
        prior_window=prior_window,
    )
