"""Aggregation and reporting engine.

Pure functions over immutable movement lists:

    filter_by_range         -> movements inside an inclusive window
    amount_in               -> amount in the reporting currency
    aggregate_by_category   -> category totals, percentages, ranking
    compare_to_prior_period -> variance against the previous window
    project_next_period     -> available margin for the next period
"""

from cashe.engine.aggregator import aggregate_by_category, category_breakdown, top_categories
from cashe.engine.calculator import (
    calculate_savings_rate,
    percentage_point_difference,
    relative_variance,
    summarize_period,
)
from cashe.engine.comparator import compare_to_prior_period
from cashe.engine.currency import amount_in, total_in
from cashe.engine.filters import FilterSet, MovementFilters
from cashe.engine.periods import filter_by_range, prior_range
from cashe.engine.projection import estimate_projection, project_next_period

__all__ = [
    "FilterSet",
    "MovementFilters",
    "aggregate_by_category",
    "amount_in",
    "calculate_savings_rate",
    "category_breakdown",
    "compare_to_prior_period",
    "estimate_projection",
    "filter_by_range",
    "percentage_point_difference",
    "prior_range",
    "project_next_period",
    "relative_variance",
    "summarize_period",
    "top_categories",
    "total_in",
]
