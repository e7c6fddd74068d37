"""Inventory commands."""

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.formatting import truncate
from ledgerdesk.domain.analysis import AnalysisService
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.inventory import normalize_locations, pcs_per_carton, summarize_stock


@click.group("inventory")
def inventory_group():
    """Stock and person inventory reports."""
    pass


@inventory_group.command("stock")
@click.pass_context
def stock(ctx):
    """Show live main inventory stock per product.

    Catalog quantities are adjusted by every transfer into or out of the
    main inventory.
    """
    service = AnalysisService(ctx.obj["db"])
    products = service.main_inventory()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Barcode':<16} {'Product':<36} {'Pcs':>8} {'Pcs/Ctn':>8} {'Ctns':>8}")
    click.echo("-" * 80)
    for p in products:
        ctns = p.qty_pcs / (p.pcs_in_ctn or 1)
        click.echo(
            f"{truncate(p.barcode, 16):<16} {truncate(p.product_name, 36):<36} "
            f"{p.qty_pcs:>8,} {p.pcs_in_ctn:>8} {ctns:>8.1f}"
        )

    summary = summarize_stock(products)
    click.echo()
    click.echo(
        f"{summary.total_items} items, {summary.total_pcs:,} pcs, {summary.total_ctns:,.1f} ctns"
    )


@inventory_group.command("people")
@click.pass_context
def people(ctx):
    """Show stock held by each person."""
    ledgers = AnalysisService(ctx.obj["db"]).person_ledgers()

    if not ledgers:
        click.echo("No person inventory found.")
        return

    click.echo(f"{'Person':<28} {'Products':>8} {'Pcs':>10} {'Ctns':>10}")
    click.echo("-" * 59)
    for ledger in ledgers:
        click.echo(
            f"{truncate(ledger.name, 28):<28} {ledger.product_count:>8} "
            f"{ledger.total_pcs:>10,} {ledger.total_ctns:>10.1f}"
        )


@inventory_group.command("person")
@click.argument("name")
@click.option("--history", is_flag=True, help="Also list the transfers touching this person")
@click.pass_context
def person(ctx, name: str, history: bool):
    """Show one person's received, distributed and balance per product."""
    service = AnalysisService(ctx.obj["db"])
    try:
        detail = service.person_detail(name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    catalog = {p.barcode: p for p in service.db.list_products()}
    names = {t.barcode: t.product_name for t in detail.transfers}

    click.echo(f"Person: {detail.ledger.name}")
    click.echo(f"{'Barcode':<16} {'Product':<30} {'Received':>9} {'Given':>9} {'Balance':>9} {'Ctns':>8}")
    click.echo("-" * 86)
    for barcode, entry in sorted(detail.ledger.products.items()):
        product = catalog.get(barcode)
        product_name = product.product_name if product else names.get(barcode, "")
        ctns = entry.balance / pcs_per_carton(barcode, catalog)
        click.echo(
            f"{truncate(barcode, 16):<16} {truncate(product_name, 30):<30} "
            f"{entry.received:>9,} {entry.distributed:>9,} {entry.balance:>9,} {ctns:>8.1f}"
        )
    click.echo()
    click.echo(f"Total: {detail.ledger.total_pcs:,} pcs, {detail.ledger.total_ctns:,.1f} ctns")

    if history:
        click.echo()
        click.echo(f"{'Date':<12} {'Number':<10} {'From':<18} {'To':<18} {'Barcode':<16} {'Pcs':>7}")
        click.echo("-" * 86)
        for t in detail.transfers:
            loc_from, loc_to = normalize_locations(t.loc_from, t.loc_to)
            click.echo(
                f"{truncate(t.date, 12):<12} {truncate(t.number, 10):<10} "
                f"{truncate(loc_from, 18):<18} {truncate(loc_to, 18):<18} "
                f"{truncate(t.barcode, 16):<16} {t.qty_pcs:>7,}"
            )


@inventory_group.command("next-number")
@click.option("--prefix", default="TRX", show_default=True, help="Number prefix, e.g. TRX or OT")
@click.pass_context
def next_number(ctx, prefix: str):
    """Print the next free transfer number."""
    click.echo(AnalysisService(ctx.obj["db"]).next_transfer_number(prefix))


def register_commands(cli):
    """Register inventory commands with main CLI."""
    cli.add_command(inventory_group)
