"""Helpers shared by CLI commands."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from cashe.core.exceptions import CasheError
from cashe.core.models import DateRange
from cashe.core.workspace import Workspace, load_workspace
from cashe.engine.periods import get_current_period, parse_date, parse_period
from cashe.report.formatting import format_currency, format_percentage, format_points

__all__ = [
    "configure_logging",
    "format_currency",
    "format_percentage",
    "format_points",
    "open_workspace",
    "resolve_range",
]


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def open_workspace(console: Console, workspace: Path | None) -> Workspace:
    """Load the workspace and its movements, exiting with code 1 on failure."""
    try:
        ws = load_workspace(workspace)
        ws.get_movements()
    except CasheError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return ws


def resolve_range(
    console: Console,
    period: str | None,
    from_date: str | None,
    to_date: str | None,
) -> DateRange:
    """Build the date range from CLI options.

    Priority (highest to lowest):

        1. --period YYYY-MM
        2. --from / --to (a missing bound defaults to the other one)
        3. current calendar month
    """
    try:
        if period:
            return parse_period(period)
        if from_date or to_date:
            start = parse_date(from_date) if from_date else None
            end = parse_date(to_date) if to_date else None
            start = start or end
            end = end or start
            if end < start:
                raise CasheError("--to cannot be before --from")
            return DateRange(start=start, end=end)
    except CasheError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return get_current_period()
