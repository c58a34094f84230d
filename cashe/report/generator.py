"""Markdown report generator.

Serializes a ReportData into human-readable markdown tables. The layout
mirrors the sections of the period report: summary, comparison, categories,
installments, top expenses, projection, statistics, transfers, movements.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

from cashe.core.models import (
    CategoryAggregate,
    Currency,
    Movement,
    MovementKind,
    ProjectionEstimate,
    ReportData,
)
from cashe.engine.currency import amount_in
from cashe.report.formatting import format_currency, format_percentage, format_points


def _cell(value: str | None, default: str = "-") -> str:
    """Escape a value for use inside a markdown table cell."""
    if not value:
        return default
    return value.replace("|", "\\|").replace("\n", " ")


def _table(headers: list[str], rows: list[list[str]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines) + "\n\n"


def _render_summary(data: ReportData) -> str:
    currency = data.currency
    s = data.summary
    md = "## Summary\n\n"
    md += _table(
        ["", currency.value],
        [
            ["Total income", format_currency(s.total_income, currency)],
            ["Total expenses", format_currency(s.total_expenses, currency)],
            ["Net balance", format_currency(s.balance, currency)],
            ["Savings rate", format_percentage(s.savings_rate)],
        ],
    )
    return md


def _render_comparison(data: ReportData) -> str:
    c = data.comparison
    if c.prior_range is None:
        return ""
    currency = data.currency
    prior_label = f"{c.prior_range.start.isoformat()} to {c.prior_range.end.isoformat()}"

    rows = []
    for label, comparison in (
        ("Income", c.income),
        ("Expenses", c.expense),
        ("Balance", c.balance),
    ):
        rows.append([
            label,
            format_currency(comparison.prior_total, currency),
            format_currency(comparison.current_total, currency),
            format_percentage(comparison.variance_percent, signed=True),
        ])
    rows.append([
        "Savings rate",
        format_percentage(c.savings_rate.prior_rate),
        format_percentage(c.savings_rate.current_rate),
        format_points(c.savings_rate.point_difference),
    ])

    md = f"## Comparison vs {prior_label}\n\n"
    md += _table(["", "Prior", "Current", "Change"], rows)
    return md


def _render_categories(
    title: str,
    categories: list[CategoryAggregate],
    currency: Currency,
) -> str:
    if not categories:
        return ""
    md = f"## {title}\n\n"
    md += _table(
        ["Category", "Amount", "%"],
        [
            [
                _cell(c.name),
                format_currency(c.total, currency),
                format_percentage(c.percentage_of_type_total),
            ]
            for c in categories
        ],
    )
    return md


def _render_installments(
    title: str,
    installments: list[Movement],
    currency: Currency,
    total: Decimal | None = None,
) -> str:
    rows = [
        [
            _cell(m.note, "No description"),
            _cell(m.installment_label),
            format_currency(amount_in(m, currency), currency),
        ]
        for m in installments
    ]
    if total is not None:
        rows.append(["**Total installments**", "", f"**{format_currency(total, currency)}**"])
    md = f"## {title}\n\n"
    md += _table(["Description", "Installment", "Amount"], rows)
    return md


def _render_top_expenses(data: ReportData) -> str:
    if not data.top_expenses:
        return ""
    currency = data.currency
    md = f"## Top {len(data.top_expenses)} expenses\n\n"
    md += _table(
        ["Date", "Note", "Amount", "Account"],
        [
            [
                m.date.isoformat(),
                _cell(m.note),
                format_currency(amount_in(m, currency), currency),
                _cell(m.account),
            ]
            for m in data.top_expenses
        ],
    )
    return md


def _render_projection(
    projection: ProjectionEstimate,
    label: str,
    period_label: str,
    currency: Currency,
) -> str:
    margin_pct = format_percentage(projection.margin_percent_of_income)
    md = f"## Projection for {label}\n\n"
    md += (
        f"> What is left to save or invest in {label}, assuming spending "
        f"repeats as in {period_label}.\n\n"
    )
    income_note = (
        "*(largest income category, no prior period to compare)*"
        if projection.used_bootstrap
        else "*(one-off income excluded)*"
    )
    md += _table(
        ["Concept", "Amount"],
        [
            [
                f"+ Recurring income {income_note}",
                format_currency(projection.recurring_income, currency),
            ],
            [
                f"- Committed installments *({len(projection.committed_movements)} installments)*",
                format_currency(projection.committed_installments, currency),
            ],
            [
                f"- Baseline expenses *(expenses without installments in {period_label})*",
                format_currency(projection.baseline_recurring_expense, currency),
            ],
            [
                "**= Available margin**",
                f"**{format_currency(projection.available_margin, currency)} "
                f"({margin_pct} of income)**",
            ],
        ],
    )
    if projection.committed_movements:
        md += _render_installments(
            f"Committed installments for {label}",
            projection.committed_movements,
            currency,
            total=projection.committed_installments,
        ).replace("## ", "### ", 1)
    return md


def _render_statistics(data: ReportData) -> str:
    currency = data.currency
    stats = data.daily_stats
    md = "## Statistics\n\n"
    md += f"- Average daily spending: {format_currency(stats.daily_average, currency)}\n"
    if stats.most_expensive_day:
        md += (
            f"- Most expensive day: {stats.most_expensive_day.isoformat()} "
            f"({format_currency(stats.most_expensive_day_total, currency)})\n"
        )
    md += f"- Days without expenses: {stats.days_without_expenses} of {stats.days_in_range}\n\n"
    return md


def _render_transfers(data: ReportData) -> str:
    if not data.transfers:
        return ""
    currency = data.currency
    md = "## Transfers\n\n"
    md += _table(
        ["Date", "From", "To", "Amount"],
        [
            [
                t.date.isoformat(),
                _cell(t.source_account),
                _cell(t.destination_account),
                format_currency(amount_in(t, currency), currency),
            ]
            for t in data.transfers
        ],
    )
    return md


def _render_movements(data: ReportData) -> str:
    if not data.movements:
        return ""
    currency = data.currency
    md = "## Movements\n\n"
    md += _table(
        ["Date", "Kind", "Amount", "Category", "Account", "Note"],
        [
            [
                m.date.isoformat(),
                "Income" if m.kind == MovementKind.INCOME else "Expense",
                format_currency(amount_in(m, currency), currency),
                _cell(m.category),
                _cell(m.account),
                _cell(m.note),
            ]
            for m in data.movements
        ],
    )
    return md


def generate_markdown_report(data: ReportData, generated_on: date | None = None) -> str:
    """Generate the complete markdown report.

    Args:
        data: ReportData for the selected range.
        generated_on: Date shown in the footer (default: data.generated_at).

    Returns:
        Markdown string.
    """
    currency = data.currency
    generated_on = generated_on or data.generated_at.date()

    md = f"# Financial summary: {data.period_label}\n\n"
    md += _render_summary(data)
    md += _render_comparison(data)
    md += _render_categories("Expenses by category", data.expenses_by_category, currency)
    md += _render_categories("Income by category", data.income_by_category, currency)
    if data.installments:
        md += _render_installments("Active installments", data.installments, currency)
    md += _render_top_expenses(data)
    if data.projection is not None and data.projection_label:
        md += _render_projection(data.projection, data.projection_label, data.period_label, currency)
    md += _render_statistics(data)
    md += _render_transfers(data)
    md += _render_movements(data)
    md += f"---\n*Generated by Cashé for {data.workspace_name} on {generated_on.isoformat()}*\n"
    return md


def save_report(markdown: str, output_path: Path) -> None:
    """Save report markdown to file.

    Args:
        markdown: Report content.
        output_path: Output file path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(markdown, encoding="utf-8")
