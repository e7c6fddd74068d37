"""CSV import commands."""

import click
from ledgerdesk.domain.csv_import import CSVImportService
from ledgerdesk.domain.errors import DomainError


def _run_import(ctx, label: str, importer) -> None:
    try:
        result = importer()
    except (DomainError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"\nImport complete:")
    click.echo(f"  Imported: {result['imported']} {label}")
    click.echo(f"  Skipped: {result['skipped']}")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


def _service(ctx) -> CSVImportService:
    return CSVImportService(ctx.obj["db"], current_user=ctx.obj.get("user"))


@click.group("import")
def import_group():
    """Import sheet exports (CSV)."""
    pass


@import_group.command("ledger")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_ledger(ctx, csv_file: str):
    """Import customer ledger lines.

    Columns: Customer Name, Date, Number, Sales Rep, Debit, Credit,
    Matching, Due Date.
    """
    service = _service(ctx)
    _run_import(ctx, "ledger rows", lambda: service.import_ledger(csv_file))


@import_group.command("transfers")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_transfers(ctx, csv_file: str):
    """Import inventory transfers.

    Columns: Barcode, Qty, User, Number, Date, Loc From, Loc To, Customer,
    Receiver, Product, Description.
    """
    service = _service(ctx)
    _run_import(ctx, "transfers", lambda: service.import_transfers(csv_file))


@import_group.command("products")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_products(ctx, csv_file: str):
    """Import the product catalog (Barcode, Product, Qty Pcs, Pcs In Ctn, Price)."""
    service = _service(ctx)
    _run_import(ctx, "products", lambda: service.import_products(csv_file))


@import_group.command("closed")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_closed(ctx, csv_file: str):
    """Import closed customers (Customer Name)."""
    service = _service(ctx)
    _run_import(ctx, "closed customers", lambda: service.import_closed_customers(csv_file))


@import_group.command("discounts")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_discounts(ctx, csv_file: str):
    """Import discount tracker lines (Customer Name, Reconciliation)."""
    service = _service(ctx)
    _run_import(ctx, "discount entries", lambda: service.import_discount_entries(csv_file))


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group)
