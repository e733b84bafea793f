"""Typer CLI interface for Dispute Delta."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dispute_delta import __version__
from dispute_delta.config import Settings
from dispute_delta.exceptions import ConfigurationError, DisputeDeltaError
from dispute_delta.models.enums import MatchStatus, SourceKind

BANNER = f"""
  Dispute Delta {__version__}
  New chargeback cases between two ledger exports,
  cross-referenced against capture and booking data.

  Run `dispute-delta --help` for commands.
"""

app = typer.Typer(
    name="dispute-delta",
    help="Dispute Delta: find new chargeback cases and trace them to payments and bookings.",
)

console = Console()

_STATUS_STYLES = {
    MatchStatus.MATCH: "green",
    MatchStatus.NO_MATCH: "red",
    MatchStatus.NOT_APPLICABLE: "dim",
}


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """Dispute Delta: find new chargeback cases and trace them to payments and bookings."""
    settings = _load_settings()
    logging.basicConfig(
        level=logging.INFO if verbose else getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(BANNER)
        raise typer.Exit()


def _decode(file_path: Path) -> list[dict]:
    from dispute_delta.ingestion import decode_table

    try:
        return decode_table(file_path).rows
    except DisputeDeltaError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _decode_optional(file_path: Path | None, label: str, notices: list[str]) -> list[dict] | None:
    """Decode an enrichment file; a failure becomes a notice and the stage is skipped."""
    from dispute_delta.ingestion import decode_table

    if file_path is None:
        return None
    try:
        return decode_table(file_path).rows
    except DisputeDeltaError as exc:
        notices.append(f"{exc} (proceeding without {label} cross-reference)")
        return None


def _status(status: MatchStatus) -> str:
    style = _STATUS_STYLES[status]
    return f"[{style}]{status.value}[/{style}]"


def _print_anomalies(report) -> None:
    table = Table(title=f"New cases ({report.summary.anomaly_count})")
    table.add_column("Case Ref")
    table.add_column("Merchant")
    table.add_column("Txn Date")
    table.add_column("Amount", justify="right")
    table.add_column("Card")
    table.add_column("Reason")
    table.add_column("Capture")
    table.add_column("Capture Ref")
    table.add_column("Booking")
    table.add_column("Folder")
    table.add_column("Route")

    for record in report.anomalies:
        route = f"{record.origin}-{record.destination}" if record.origin or record.destination else ""
        table.add_row(
            escape(record.case_reference),
            escape(record.merchant),
            record.transaction_date,
            str(record.transaction_amount),
            record.card_last4,
            record.reason_code,
            _status(record.capture_match),
            escape(record.capture_reference or ""),
            _status(record.booking_match),
            escape(record.folder_number or ""),
            route,
        )
    console.print(table)


@app.command()
def compare(
    baseline: Path = typer.Argument(..., help="Earlier ledger export (.csv or .xlsx)"),
    updated: Path = typer.Argument(..., help="Later ledger export (.csv or .xlsx)"),
    capture: Path | None = typer.Option(
        None, "--capture", "-c", help="Payment-capture export used to trace anomalies"
    ),
    booking: Path | None = typer.Option(
        None, "--booking", "-b", help="Booking export linked through capture references"
    ),
    csv_output: Path | None = typer.Option(None, "--csv", help="Write enriched anomalies to a CSV file"),
    xlsx_output: Path | None = typer.Option(None, "--xlsx", help="Write enriched anomalies to an Excel workbook"),
    report_output: Path | None = typer.Option(None, "--report", help="Write a plain-text report"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    tolerance: float | None = typer.Option(
        None, "--tolerance", min=0.0001, help="Amount tolerance for capture matching (default 0.05)"
    ),
    date_format: str | None = typer.Option(
        None, "--date-format", help="strftime format for converted dates (default %d/%m/%Y)"
    ),
) -> None:
    """Find cases in UPDATED that are not in BASELINE and cross-reference them."""
    from dispute_delta.engines.pipeline import DeltaPipeline

    settings = _load_settings()
    if tolerance is not None:
        settings.amount_tolerance = tolerance
    if date_format:
        settings.date_format = date_format

    baseline_rows = _decode(baseline)
    updated_rows = _decode(updated)
    notices: list[str] = []
    capture_rows = _decode_optional(capture, "capture", notices)
    booking_rows = _decode_optional(booking, "booking", notices)

    pipeline = DeltaPipeline(
        amount_tolerance=settings.amount_tolerance,
        date_format=settings.date_format,
    )
    report = pipeline.run(
        baseline_rows,
        updated_rows,
        capture_rows=capture_rows,
        booking_rows=booking_rows,
        baseline_name=baseline.name,
        updated_name=updated.name,
        notices=notices,
    )

    if csv_output:
        from dispute_delta.reports.export import write_csv

        written = write_csv(report.anomalies, csv_output)
        typer.echo(f"Wrote {written} anomalies to {csv_output}", err=json_output)

    if xlsx_output:
        from dispute_delta.reports.export import write_xlsx

        written = write_xlsx(report.anomalies, xlsx_output)
        typer.echo(f"Wrote {written} anomalies to {xlsx_output}", err=json_output)

    if report_output:
        from dispute_delta.reports.anomaly_report import AnomalyReportGenerator

        report_output.parent.mkdir(parents=True, exist_ok=True)
        report_output.write_text(AnomalyReportGenerator().render(report), encoding="utf-8")
        typer.echo(f"Wrote report to {report_output}", err=json_output)

    for warning in report.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
        return

    if not report.anomalies:
        typer.echo("No new cases: every case reference in the updated file is in the baseline.")
        return

    _print_anomalies(report)
    summary = report.summary
    typer.echo("\nSummary:")
    typer.echo(f"  New cases:        {summary.anomaly_count}")
    typer.echo(f"  Total exposure:   {summary.total_exposure:,.2f}")
    typer.echo(f"  Top reason code:  {summary.top_reason}")
    if capture_rows is not None:
        typer.echo(f"  Capture matches:  {summary.capture_matches}")
    if booking_rows is not None and capture_rows is not None:
        typer.echo(f"  Booking matches:  {summary.booking_matches}")


@app.command()
def headers(
    file: Path = typer.Argument(..., help="Export to inspect (.csv or .xlsx)"),
    source: SourceKind = typer.Option(
        SourceKind.LEDGER, "--source", "-s", case_sensitive=False, help="Which alias table to apply"
    ),
) -> None:
    """Show which raw header each canonical field resolves to."""
    from dispute_delta.normalization.records import RecordNormalizer

    rows = _decode(file)
    if not rows:
        typer.echo(f"{file.name} has no data rows.", err=True)
        raise typer.Exit(1)

    mapping = RecordNormalizer().resolve(source, rows)

    table = Table(title=f"{file.name} ({source.value.lower()} columns)")
    table.add_column("Field")
    table.add_column("Header")
    for canonical, header in mapping.columns.items():
        table.add_row(canonical, escape(header) if header is not None else "[red]unresolved[/red]")
    console.print(table)
