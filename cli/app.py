from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from cli.render import render_outcomes, render_report
from exceptions import SyncError
from logging_config import configure_logging
from services.parser import iter_row_outcomes
from services.sync import build_default_sync_service


app = typer.Typer(
    help="Copy scale readings from the monitoring page into the document store.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)


@app.command("run")
def run_command() -> None:
    """Perform one synchronization pass and exit."""
    try:
        service = build_default_sync_service()
        try:
            report = service.run()
        finally:
            service.close()
            build_default_sync_service.cache_clear()
    except SyncError as exc:
        typer.secho(f"Sync failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_report(report)


@app.command("parse")
def parse_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Saved HTML page."),
    show_skipped: bool = typer.Option(
        True,
        "--show-skipped/--hide-skipped",
        help="List rows that did not produce a record.",
    ),
) -> None:
    """Parse a saved monitoring page and print the extracted records."""
    html = file.read_text(encoding="utf-8", errors="replace")
    render_outcomes(iter_row_outcomes(html), show_skipped=show_skipped)
