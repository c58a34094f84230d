"""Next-period cash-flow projection.

Estimates how much of next period's income is left once installments that
are already scheduled and the usual day-to-day spending are paid:

    Recurring income
    - Installments dated in the next period
    - Baseline expense (current expenses without installments)
    = Available margin

Recurring income only counts income categories that also appeared in the
period before the current one, which leaves out one-off gifts and
reimbursements. The margin is never clamped: a negative margin means the
next period is already over-committed.
"""

from collections.abc import Iterable
from decimal import Decimal

from cashe.core.models import (
    Currency,
    DateRange,
    Movement,
    MovementKind,
    ProjectionEstimate,
)
from cashe.engine.aggregator import aggregate_by_category
from cashe.engine.calculator import calculate_share
from cashe.engine.categories import category_key
from cashe.engine.currency import total_in
from cashe.engine.periods import (
    filter_by_range,
    next_calendar_period,
    previous_calendar_period,
)


def _of_kind(movements: Iterable[Movement], kind: MovementKind) -> list[Movement]:
    return [m for m in movements if m.kind == kind]


def calculate_recurring_income(
    current_movements: Iterable[Movement],
    prior_movements: Iterable[Movement],
    currency: Currency | str = Currency.ARS,
) -> tuple[Decimal, bool]:
    """Estimate recurring income for the current period.

    Income categories present in both periods are treated as recurring.
    Without any prior income (first tracked period) the largest current
    income category stands in for it, on the assumption that it is the
    salary.

    Args:
        current_movements: Movements of the current period.
        prior_movements: Movements of the period right before it.
        currency: Reporting currency.

    Returns:
        Tuple of (recurring income, whether the largest-category fallback
        was used).
    """
    current_income = _of_kind(current_movements, MovementKind.INCOME)
    prior_keys = {
        category_key(m.category) for m in _of_kind(prior_movements, MovementKind.INCOME)
    }

    if prior_keys:
        recurring = [m for m in current_income if category_key(m.category) in prior_keys]
        return total_in(recurring, currency), False

    categories = aggregate_by_category(current_income, MovementKind.INCOME, currency)
    if not categories:
        return Decimal(0), True
    return categories[0].total, True


def estimate_projection(
    current_movements: Iterable[Movement],
    prior_movements: Iterable[Movement],
    next_period_movements: Iterable[Movement],
    currency: Currency | str = Currency.ARS,
    next_range: DateRange | None = None,
) -> ProjectionEstimate:
    """Project the available margin of the next period.

    Args:
        current_movements: Movements of the current period.
        prior_movements: Movements of the period before the current one.
        next_period_movements: Movements already dated in the next period
            (typically scheduled installments).
        currency: Reporting currency.
        next_range: Next period window, stored on the estimate for display.

    Returns:
        ProjectionEstimate. margin_percent_of_income is None when there is
        no recurring income.
    """
    currency = Currency(currency)
    current_movements = list(current_movements)

    recurring_income, used_bootstrap = calculate_recurring_income(
        current_movements, prior_movements, currency
    )

    committed = [
        m
        for m in _of_kind(next_period_movements, MovementKind.EXPENSE)
        if m.is_installment
    ]
    committed_total = total_in(committed, currency)

    current_expenses = _of_kind(current_movements, MovementKind.EXPENSE)
    total_expenses = total_in(current_expenses, currency)
    installment_expenses = total_in(
        (m for m in current_expenses if m.is_installment), currency
    )
    baseline = total_expenses - installment_expenses

    margin = recurring_income - committed_total - baseline
    margin_pct = calculate_share(margin, recurring_income) if recurring_income > 0 else None

    return ProjectionEstimate(
        recurring_income=recurring_income,
        committed_installments=committed_total,
        baseline_recurring_expense=baseline,
        available_margin=margin,
        margin_percent_of_income=margin_pct,
        next_range=next_range,
        committed_movements=committed,
        used_bootstrap=used_bootstrap,
    )


def project_next_period(
    all_movements: Iterable[Movement],
    current_range: DateRange,
    currency: Currency | str = Currency.ARS,
) -> ProjectionEstimate:
    """Project the period following current_range from the full history.

    Previous and next periods are calendar-aligned when current_range covers
    whole months (see periods.next_calendar_period). An unset range yields
    an all-zero estimate.
    """
    if not current_range.is_set:
        return ProjectionEstimate()

    all_movements = list(all_movements)
    previous = previous_calendar_period(current_range)
    following = next_calendar_period(current_range)

    return estimate_projection(
        current_movements=filter_by_range(all_movements, current_range),
        prior_movements=filter_by_range(all_movements, previous),
        next_period_movements=filter_by_range(all_movements, following),
        currency=currency,
        next_range=following,
    )
