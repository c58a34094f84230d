"""Category aggregation.

Groups movements of one kind by canonical category key and ranks them by
total in the reporting currency. Percentages are always taken against the
full total of the kind, including when callers later truncate the list.
"""

from collections.abc import Iterable
from decimal import Decimal

from cashe.core.models import (
    CategoryAggregate,
    CategoryBreakdown,
    Currency,
    Movement,
    MovementKind,
)
from cashe.engine.calculator import calculate_share
from cashe.engine.categories import category_key, category_label
from cashe.engine.currency import amount_in

DEFAULT_OTHER_LABEL = "Others"


def aggregate_by_category(
    movements: Iterable[Movement],
    kind: MovementKind | str,
    currency: Currency | str = Currency.ARS,
) -> list[CategoryAggregate]:
    """Aggregate movements of one kind by category.

    "🍔 Food" and "Food" share the key "Food"; the aggregate keeps the label
    seen first. Empty categories are grouped as "Sin categoría".

    Args:
        movements: Movements to aggregate (any kinds; others are skipped).
        kind: INCOME or EXPENSE.
        currency: Reporting currency used for ranking and percentages.

    Returns:
        Aggregates sorted by total descending; ties keep first-seen order.
    """
    kind = MovementKind(kind)
    currency = Currency(currency)

    names: dict[str, str] = {}
    primary: dict[str, Decimal] = {}
    secondary: dict[str, Decimal] = {}
    counts: dict[str, int] = {}

    for m in movements:
        if m.kind != kind:
            continue
        key = category_key(m.category)
        if key not in names:
            names[key] = category_label(m.category)
            primary[key] = Decimal(0)
            secondary[key] = Decimal(0)
            counts[key] = 0
        primary[key] += amount_in(m, Currency.ARS)
        secondary[key] += amount_in(m, Currency.USD)
        counts[key] += 1

    totals = primary if currency == Currency.ARS else secondary
    type_total = sum(totals.values(), Decimal(0))

    aggregates = [
        CategoryAggregate(
            name=names[key],
            key=key,
            total_primary=primary[key],
            total_secondary=secondary[key],
            total=totals[key],
            percentage_of_type_total=calculate_share(totals[key], type_total),
            movement_count=counts[key],
        )
        for key in names
    ]
    # sorted() is stable: equal totals keep insertion (first-seen) order
    return sorted(aggregates, key=lambda a: a.total, reverse=True)


def category_breakdown(
    movements: Iterable[Movement],
    kind: MovementKind | str,
    currency: Currency | str = Currency.ARS,
) -> CategoryBreakdown:
    """Aggregate by category and keep the full type total alongside."""
    categories = aggregate_by_category(movements, kind, currency)
    return CategoryBreakdown(
        kind=MovementKind(kind),
        currency=Currency(currency),
        total=sum((c.total for c in categories), Decimal(0)),
        categories=categories,
    )


def top_categories(
    aggregates: list[CategoryAggregate],
    limit: int,
    other_label: str = DEFAULT_OTHER_LABEL,
) -> list[CategoryAggregate]:
    """Keep the first `limit` aggregates and fold the rest into one bucket.

    The synthetic bucket is flagged with is_other=True. Its percentage is the
    sum of the folded percentages, so the list still adds up to the full
    total. Nothing is folded when there are at most `limit` aggregates.

    Args:
        aggregates: Aggregates as returned by aggregate_by_category().
        limit: Number of categories to keep (must be >= 0).
        other_label: Name of the synthetic bucket.

    Returns:
        New list of at most limit + 1 aggregates.
    """
    if limit < 0:
        raise ValueError("limit must be >= 0")
    if len(aggregates) <= limit:
        return list(aggregates)

    kept = list(aggregates[:limit])
    rest = aggregates[limit:]
    kept.append(
        CategoryAggregate(
            name=other_label,
            key=other_label,
            total_primary=sum((a.total_primary for a in rest), Decimal(0)),
            total_secondary=sum((a.total_secondary for a in rest), Decimal(0)),
            total=sum((a.total for a in rest), Decimal(0)),
            percentage_of_type_total=sum(
                (a.percentage_of_type_total for a in rest), Decimal(0)
            ),
            movement_count=sum(a.movement_count for a in rest),
            is_other=True,
        )
    )
    return kept
