"""Report module for period summaries.

This module provides the data layer and markdown generation for the
period report.

Sections:
    1. Summary - totals, balance, savings rate
    2. Comparison - variance against the previous period
    3. Categories - expenses and income by category
    4. Installments & top expenses
    5. Projection - available margin for the next period
    6. Statistics, transfers and the movement list
"""

from cashe.report.data_provider import ReportDataProvider
from cashe.report.generator import generate_markdown_report, save_report

__all__ = [
    "ReportDataProvider",
    "generate_markdown_report",
    "save_report",
]
