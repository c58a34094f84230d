"""Implementation of 'cashe project' command.

Shows the estimated available margin for the period after the selected one.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from cashe.cli.utils import format_currency, format_percentage, open_workspace, resolve_range
from cashe.core.models import Currency
from cashe.engine.periods import format_period
from cashe.engine.projection import project_next_period

console = Console()


def project_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Base month as YYYY-MM (default: current month)",
    ),
    from_date: str = typer.Option(None, "--from", help="Range start (YYYY-MM-DD)"),
    to_date: str = typer.Option(None, "--to", help="Range end (YYYY-MM-DD)"),
    currency: Currency = typer.Option(None, "--currency", "-c", help="Reporting currency"),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Project the available margin of the next period.

    Recurring income minus installments already scheduled for the next
    period minus this period's spending without installments.
    """
    ws = open_workspace(console, workspace)
    date_range = resolve_range(console, period, from_date, to_date)
    currency = currency or ws.config.reporting_currency

    estimate = project_next_period(ws.get_movements(), date_range, currency)

    table = Table(title=f"Projection for {format_period(estimate.next_range)}")
    table.add_column("Concept")
    table.add_column("Amount", justify="right")
    table.add_row("+ Recurring income", format_currency(estimate.recurring_income, currency))
    table.add_row(
        f"- Committed installments ({len(estimate.committed_movements)})",
        format_currency(estimate.committed_installments, currency),
    )
    table.add_row(
        "- Baseline expenses",
        format_currency(estimate.baseline_recurring_expense, currency),
    )
    margin_style = "green" if estimate.available_margin >= 0 else "red"
    table.add_row(
        "[bold]= Available margin[/bold]",
        f"[{margin_style}]{format_currency(estimate.available_margin, currency)}[/{margin_style}]",
    )

    console.print()
    console.print(table)
    console.print(
        f"Margin: {format_percentage(estimate.margin_percent_of_income)} of recurring income"
    )
    if estimate.used_bootstrap:
        console.print(
            "[yellow]No income in the previous period: recurring income is the "
            "largest income category of this period[/yellow]"
        )
