"""Implementation of 'cashe compare' command.

Compares a period with the equally long period right before it.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cashe.cli.utils import (
    format_currency,
    format_percentage,
    format_points,
    open_workspace,
    resolve_range,
)
from cashe.core.models import Currency
from cashe.engine.comparator import compare_to_prior_period
from cashe.engine.filters import FilterSet, MovementFilters
from cashe.engine.periods import format_period

console = Console()


def compare_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Month to compare as YYYY-MM (default: current month)",
    ),
    from_date: str = typer.Option(None, "--from", help="Range start (YYYY-MM-DD)"),
    to_date: str = typer.Option(None, "--to", help="Range end (YYYY-MM-DD)"),
    currency: Currency = typer.Option(None, "--currency", "-c", help="Reporting currency"),
    account: list[str] = typer.Option(
        None,
        "--account",
        "-a",
        help="Only count these accounts in the current period (repeatable)",
    ),
    category: list[str] = typer.Option(
        None,
        "--category",
        help="Only count these categories in the current period (repeatable)",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Compare a period against the previous one.

    Account and category filters narrow the current period only; the prior
    period always reflects all movements.
    """
    ws = open_workspace(console, workspace)
    date_range = resolve_range(console, period, from_date, to_date)
    currency = currency or ws.config.reporting_currency

    filters = MovementFilters(
        accounts=FilterSet.of(*(account or [])),
        categories=FilterSet.of(*(category or [])),
    )
    result = compare_to_prior_period(
        ws.get_movements(),
        date_range,
        currency,
        None if filters.is_empty else filters,
    )

    title = f"{format_period(date_range)} vs {format_period(result.prior_range)}"
    table = Table(title=title)
    table.add_column("")
    table.add_column("Prior", justify="right")
    table.add_column("Current", justify="right")
    table.add_column("Change", justify="right")

    for label, comparison in (
        ("Income", result.income),
        ("Expenses", result.expense),
        ("Balance", result.balance),
    ):
        table.add_row(
            label,
            format_currency(comparison.prior_total, currency),
            format_currency(comparison.current_total, currency),
            format_percentage(comparison.variance_percent, signed=True),
        )
    table.add_row(
        "Savings rate",
        format_percentage(result.savings_rate.prior_rate),
        format_percentage(result.savings_rate.current_rate),
        format_points(result.savings_rate.point_difference),
    )

    console.print()
    console.print(table)
    if not filters.is_empty:
        console.print("[dim]Filters apply to the current period only[/dim]")
