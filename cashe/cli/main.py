"""Cashé command-line entry point."""

import typer

from cashe import __version__
from cashe.cli.compare import compare_command
from cashe.cli.project import project_command
from cashe.cli.report import report_command
from cashe.cli.status import status_command
from cashe.cli.utils import configure_logging

app = typer.Typer(
    name="cashe",
    help="Personal finance statistics: categories, comparisons and projections.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cashe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Cashé: statistics and projections over your movements."""
    configure_logging(verbose)


app.command(name="status")(status_command)
app.command(name="compare")(compare_command)
app.command(name="project")(project_command)
app.command(name="report")(report_command)


if __name__ == "__main__":
    app()
