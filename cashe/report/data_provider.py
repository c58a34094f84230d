"""Report data provider.

Collects and transforms all data needed for report generation.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from cashe.core.models import Currency, DateRange, MovementKind, ReportData
from cashe.engine.aggregator import aggregate_by_category, top_categories
from cashe.engine.calculator import summarize_period
from cashe.engine.comparator import compare_to_prior_period
from cashe.engine.filters import MovementFilters
from cashe.engine.periods import filter_by_range, format_period, get_current_period
from cashe.engine.projection import project_next_period
from cashe.engine.statistics import (
    active_installments,
    daily_spending_stats,
    monthly_timeline,
    top_expenses,
    transfers,
)

if TYPE_CHECKING:
    from cashe.core.workspace import Workspace

logger = logging.getLogger(__name__)


class ReportDataProvider:
    """Provides all data needed for a period report.

    Runs every engine stage once for the requested range and packs the
    results into a ReportData.
    """

    def __init__(self, workspace: "Workspace"):
        """Initialize data provider.

        Args:
            workspace: The workspace to get movements and settings from.
        """
        self.ws = workspace
        self.config = workspace.config

    def get_report_data(
        self,
        date_range: DateRange | None = None,
        currency: Currency | str | None = None,
        filters: MovementFilters | None = None,
    ) -> ReportData:
        """Get complete report data.

        Args:
            date_range: Range to report. If None, uses the current month.
            currency: Reporting currency. If None, uses the workspace setting.
            filters: Display filters for the current range. The prior-period
                baseline and the projection always use all movements.

        Returns:
            ReportData with every derived structure for the range.
        """
        date_range = date_range or get_current_period()
        currency = Currency(currency or self.config.reporting_currency)

        all_movements = self.ws.get_movements()
        current = filter_by_range(all_movements, date_range)
        if filters is not None:
            current = filters.apply(current)

        logger.info(
            "Building report for %s: %d of %d movements in range",
            format_period(date_range),
            len(current),
            len(all_movements),
        )

        projection = project_next_period(all_movements, date_range, currency)

        # Newest first, transfers listed separately
        listed = sorted(
            (m for m in current if m.kind != MovementKind.TRANSFER),
            key=lambda m: m.date,
            reverse=True,
        )

        return ReportData(
            workspace_name=self.ws.name,
            currency=currency,
            generated_at=datetime.now(),
            period_label=format_period(date_range),
            date_range=date_range,
            # Summary
            summary=summarize_period(current, currency),
            comparison=compare_to_prior_period(all_movements, date_range, currency, filters),
            # Categories
            expenses_by_category=top_categories(
                aggregate_by_category(current, MovementKind.EXPENSE, currency),
                self.config.top_categories,
                self.config.other_label,
            ),
            income_by_category=top_categories(
                aggregate_by_category(current, MovementKind.INCOME, currency),
                self.config.top_categories,
                self.config.other_label,
            ),
            # Statistics
            daily_stats=daily_spending_stats(current, date_range, currency),
            top_expenses=top_expenses(current, self.config.top_expenses, currency),
            installments=active_installments(current),
            timeline=monthly_timeline(current, date_range, currency),
            # Projection
            projection=projection if date_range.is_set else None,
            projection_label=(
                format_period(projection.next_range) if projection.next_range else None
            ),
            # Movements
            transfers=transfers(current),
            movements=listed,
        )
