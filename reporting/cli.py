"""Command line interface for generating invoices and checking dimension data.

Machine-readable output (the invoice JSON document) goes to *stdout* or to a
file; human-readable summaries go to *stderr* via Rich.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from reporting.core.config import settings
from reporting.core.database import init_db, read_only_session
from reporting.core.exceptions import InvoiceGenerationError
from reporting.schemas.check import MissingField
from reporting.schemas.invoice import Invoice
from reporting.services.billing_period import BillingPeriod
from reporting.services.completeness_check import CompletenessCheckService
from reporting.services.invoice_generation import InvoiceGenerationService

app = typer.Typer(
    name="reporting",
    help="Generate monthly invoices from metered usage facts.",
    no_args_is_help=True,
)
console = Console(stderr=True)


@app.callback()
def _global_options(
    log_level: str = typer.Option(
        settings.LOG_LEVEL,
        "--log-level",
        help="Python logging level.",
        envvar="LOG_LEVEL",
    ),
) -> None:
    """Global options applied to every command."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _display_invoice_summary(invoices: list[Invoice]) -> None:
    table = Table(title="Invoices")
    table.add_column("Tenant")
    table.add_column("Categories", justify="right")
    table.add_column("Items", justify="right")
    table.add_column("Total", justify="right")
    for invoice in invoices:
        table.add_row(
            invoice.tenant.source,
            str(len(invoice.categories)),
            str(sum(len(c.items) for c in invoice.categories)),
            f"{invoice.total:.2f}",
        )
    console.print(table)


def _display_missing_fields(missing: list[MissingField]) -> None:
    table = Table(title="Missing fields")
    table.add_column("Table")
    table.add_column("Source")
    table.add_column("Field")
    table.add_column("ID", style="dim")
    for entry in missing:
        table.add_row(entry.table, entry.source, entry.missing_field, str(entry.id))
    console.print(table)


@app.command("invoice")
def invoice_command(
    year: int | None = typer.Option(None, "--year", help="Year to invoice. Defaults to last month's."),
    month: int | None = typer.Option(None, "--month", help="Month (1-12). Defaults to last month."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the invoice JSON to this file instead of stdout."
    ),
) -> None:
    """Generate the invoices of a calendar month."""
    try:
        if year is None and month is None:
            period = BillingPeriod.previous()
        elif year is None or month is None:
            raise ValueError("--year and --month must be given together")
        else:
            period = BillingPeriod(year, month)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc

    try:
        with read_only_session() as db:
            invoices = InvoiceGenerationService(db).generate(period)
    except InvoiceGenerationError as exc:
        console.print(f"[red]Invoice generation failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    document = json.dumps([invoice.model_dump(mode="json") for invoice in invoices], indent=2)
    if output is not None:
        output.write_text(document + "\n", encoding="utf-8")
    else:
        typer.echo(document)

    _display_invoice_summary(invoices)


@app.command("check")
def check_command() -> None:
    """Report dimension rows missing data required for invoicing."""
    try:
        with read_only_session() as db:
            missing = CompletenessCheckService(db).check_missing()
    except SQLAlchemyError as exc:
        console.print(f"[red]Completeness check failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if not missing:
        console.print("[green]No missing fields.[/green]")
        return

    _display_missing_fields(missing)
    raise typer.Exit(code=1)


@app.command("migrate")
def migrate_command() -> None:
    """Create the fact store tables if they do not exist."""
    init_db()
    console.print("[green]Database schema is up to date.[/green]")
