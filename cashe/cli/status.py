"""Implementation of 'cashe status' command.

Shows totals for a period, the change against the previous period and the
top categories.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from cashe.cli.utils import (
    format_currency,
    format_percentage,
    format_points,
    open_workspace,
    resolve_range,
)
from cashe.core.models import Currency, MovementKind
from cashe.engine.aggregator import aggregate_by_category, top_categories
from cashe.engine.calculator import summarize_period
from cashe.engine.comparator import compare_to_prior_period
from cashe.engine.periods import filter_by_range, format_period

console = Console()


def _trend(variance) -> str:
    if variance is None:
        return "[dim](no prior data)[/dim]"
    color = "green" if variance >= 0 else "red"
    return f"[{color}]{format_percentage(variance, signed=True)}[/{color}]"


def status_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Month to show as YYYY-MM (default: current month)",
    ),
    from_date: str = typer.Option(None, "--from", help="Range start (YYYY-MM-DD)"),
    to_date: str = typer.Option(None, "--to", help="Range end (YYYY-MM-DD)"),
    currency: Currency = typer.Option(
        None,
        "--currency",
        "-c",
        help="Reporting currency (default: workspace setting)",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Show period status.

    Displays income, expenses, balance and savings rate with their change
    against the previous period, followed by the top expense categories.
    """
    ws = open_workspace(console, workspace)
    date_range = resolve_range(console, period, from_date, to_date)
    currency = currency or ws.config.reporting_currency

    all_movements = ws.get_movements()
    movements = filter_by_range(all_movements, date_range)
    summary = summarize_period(movements, currency)
    comparison = compare_to_prior_period(all_movements, date_range, currency)

    console.print()
    console.print(Panel(f"[bold]Status for {format_period(date_range)}[/bold]", style="cyan"))
    console.print()

    if summary.movement_count == 0:
        console.print("[yellow]No movements found for this period[/yellow]")
        raise typer.Exit(0)

    console.print("[bold]Totals[/bold]")
    console.print(
        f"  Income:        {format_currency(summary.total_income, currency):>16}  "
        f"{_trend(comparison.income.variance_percent)}"
    )
    console.print(
        f"  Expenses:      {format_currency(summary.total_expenses, currency):>16}  "
        f"{_trend(comparison.expense.variance_percent)}"
    )
    console.print(
        f"  Balance:       {format_currency(summary.balance, currency):>16}  "
        f"{_trend(comparison.balance.variance_percent)}"
    )
    console.print(
        f"  Savings rate:  {format_percentage(summary.savings_rate):>16}  "
        f"{format_points(comparison.savings_rate.point_difference)}"
    )
    console.print()

    expenses = top_categories(
        aggregate_by_category(movements, MovementKind.EXPENSE, currency),
        5,
        ws.config.other_label,
    )
    if expenses:
        console.print("[bold]Top Categories[/bold]")
        for cat in expenses:
            marker = "[dim](grouped)[/dim]" if cat.is_other else ""
            console.print(
                f"  {cat.name}: {format_currency(cat.total, currency):>14} "
                f"({format_percentage(cat.percentage_of_type_total)}) {marker}"
            )
        console.print()

    console.print(f"[dim]Movements: {summary.movement_count}[/dim]")
    if summary.transfer_count:
        console.print(f"[dim]Transfers: {summary.transfer_count}[/dim]")
