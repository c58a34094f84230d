"""Implementation of 'cashe report' command.

Generates a markdown report with:
1. Summary - totals, balance, savings rate
2. Comparison - change against the previous period
3. Categories - expenses and income by category
4. Installments and top expenses
5. Projection - available margin for the next period
6. Statistics, transfers and the full movement list
"""

from pathlib import Path

import typer
from rich.console import Console

from cashe.cli.utils import open_workspace, resolve_range
from cashe.core.models import Currency
from cashe.report import ReportDataProvider, generate_markdown_report, save_report

console = Console()


def report_command(
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="Month to report as YYYY-MM (default: current month)",
    ),
    from_date: str = typer.Option(None, "--from", help="Range start (YYYY-MM-DD)"),
    to_date: str = typer.Option(None, "--to", help="Range end (YYYY-MM-DD)"),
    currency: Currency = typer.Option(None, "--currency", "-c", help="Reporting currency"),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path (default: reports/<period>.md)",
    ),
    workspace: Path = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Path to workspace (default: current directory)",
    ),
) -> None:
    """Generate a markdown report for a period."""
    ws = open_workspace(console, workspace)
    date_range = resolve_range(console, period, from_date, to_date)

    provider = ReportDataProvider(ws)
    data = provider.get_report_data(date_range, currency)

    if data.summary.movement_count == 0:
        console.print("[yellow]No movements found for this period[/yellow]")
        # Still generate the report (it will show zero totals)

    markdown = generate_markdown_report(data)

    if output:
        output_path = output
    else:
        output_path = ws.reports_dir / f"{data.period_label}.md"

    save_report(markdown, output_path)

    console.print(f"[green]Report generated:[/green] {output_path}")
