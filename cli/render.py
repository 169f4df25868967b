from __future__ import annotations

from typing import Any, Iterable

import typer

from app.schemas import SyncReport
from services.parser import ParsedRow, RowOutcome


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_report(report: SyncReport) -> None:
    echo_heading("Sync Result")
    echo_key_values(
        [
            ("status", report.status.value),
            ("record_count", report.record_count),
            ("collection_path", report.collection_path),
            ("message", report.message),
        ]
    )


def render_outcomes(outcomes: Iterable[RowOutcome], show_skipped: bool = True) -> None:
    parsed: list[ParsedRow] = []
    skipped = []
    for outcome in outcomes:
        if isinstance(outcome, ParsedRow):
            parsed.append(outcome)
        else:
            skipped.append(outcome)

    echo_heading("Records")
    if parsed:
        for row in parsed:
            record = row.record
            typer.echo(
                f"  - {record.date} id={record.id} weight={record.weight} "
                f"battery={record.battery} temp={record.temp}"
            )
    else:
        typer.echo("No records found.")

    if not show_skipped:
        return

    typer.echo()
    echo_heading("Skipped rows")
    if skipped:
        for row in skipped:
            typer.echo(f"  - row {row.row_index}: {row.reason} ({row.raw_text})")
    else:
        typer.echo("No rows skipped.")
