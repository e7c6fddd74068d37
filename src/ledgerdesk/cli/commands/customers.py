"""Customer rating commands."""

import click
from ledgerdesk.cli.date_filters import AS_OF_HELP, resolve_cli_as_of
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.cli.formatting import format_amount, format_date, format_rate, truncate
from ledgerdesk.domain.analysis import CUSTOMER_SORT_KEYS, AnalysisService
from ledgerdesk.domain.entities import DebtRating
from ledgerdesk.domain.errors import DomainError

RATING_CHOICES = [r.value for r in DebtRating]


@click.command("customers")
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--rating", type=click.Choice(RATING_CHOICES, case_sensitive=False), help="Only show customers with this rating")
@click.option("--search", help="Filter by customer name")
@click.option("--sort", "sort_by", type=click.Choice(sorted(CUSTOMER_SORT_KEYS)), default="net-debt", show_default=True)
@click.pass_context
def list_customers(ctx, as_of: str | None, rating: str | None, search: str | None, sort_by: str):
    """List customers with net debt, collection rate and rating."""
    evaluation_date = resolve_cli_as_of(ctx, as_of)
    service = AnalysisService(ctx.obj["db"])

    rating_filter = None
    if rating:
        rating_filter = DebtRating(rating.capitalize())

    rated = service.customer_report(
        as_of=evaluation_date, rating=rating_filter, search=search, sort_by=sort_by
    )

    if not rated:
        click.echo("No customers found.")
        return

    click.echo(
        f"{'Customer':<32} {'Net Debt':>14} {'Coll.':>7} {'Last Payment':<12} "
        f"{'Last Sale':<12} {'Score':>5} {'Rating':<6}"
    )
    click.echo("-" * 95)
    for rc in rated:
        c = rc.customer
        click.echo(
            f"{truncate(c.customer_name, 32):<32} {format_amount(c.net_debt):>14} "
            f"{format_rate(c.collection_ratio * 100):>7} {format_date(c.last_payment_date):<12} "
            f"{format_date(c.last_sales_date):<12} {rc.breakdown.total_score:>5} {rc.rating.value:<6}"
        )

    counts = {r: sum(1 for rc in rated if rc.rating is r) for r in DebtRating}
    click.echo()
    click.echo(
        f"{len(rated)} customers: "
        + ", ".join(f"{counts[r]} {r.value}" for r in DebtRating)
    )


@click.command("customer")
@click.argument("name")
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--rows", "show_rows", is_flag=True, help="Show the customer's ledger rows")
@click.pass_context
def show_customer(ctx, name: str, as_of: str | None, show_rows: bool):
    """Show one customer's aggregate and rating breakdown."""
    evaluation_date = resolve_cli_as_of(ctx, as_of)
    service = AnalysisService(ctx.obj["db"])

    try:
        detail = service.customer_detail(name, evaluation_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    c = detail.rated.customer
    b = detail.rated.breakdown
    click.echo(f"Customer: {c.customer_name}")
    click.echo(f"  Sales reps: {', '.join(sorted(c.sales_reps)) or '-'}")
    click.echo(f"  Transactions: {c.transaction_count}")
    click.echo(f"  Total debit: {format_amount(c.total_debit)}")
    click.echo(f"  Total credit: {format_amount(c.total_credit)}")
    click.echo(f"  Net debt: {format_amount(c.net_debt)}")
    click.echo(f"  Net sales: {format_amount(c.net_sales)}")
    click.echo(
        f"  Last payment: {format_date(c.last_payment_date)} "
        f"({format_amount(c.last_payment_amount)}, {c.last_payment_matching or '-'})"
    )
    click.echo(f"  Last sale: {format_date(c.last_sales_date)} ({format_amount(c.last_sales_amount)})")
    click.echo(f"  Sales last 90 days: {format_amount(c.sales_3m)} in {c.sales_count_3m} invoices")
    click.echo(f"  Payments last 90 days: {format_amount(c.payments_3m)} in {c.payments_count_3m} payments")
    click.echo()
    click.echo(f"Rating: {b.rating.value}")
    if b.closed:
        click.echo("  Customer is closed")
    elif c.net_debt < 0:
        click.echo("  Customer is in credit")
    elif b.risk_flag_negative_sales:
        click.echo("  Risk: negative sales without payments in the last 90 days")
    elif b.risk_flag_dormant:
        click.echo("  Risk: balance outstanding with no sales or payments in the last 90 days")
    click.echo(f"  Debt size: {b.debt_size_score}/2")
    click.echo(f"  Collection rate: {b.collection_rate_score}/2")
    click.echo(f"  Payment recency: {b.payment_recency_score}/2")
    click.echo(f"  Payment frequency: {b.payment_frequency_score}/2")
    click.echo(f"  Sale recency: {b.sale_recency_score}/2")
    click.echo(f"  Total score: {b.total_score}/10")

    if show_rows:
        click.echo()
        click.echo(f"{'Date':<12} {'Number':<14} {'Debit':>12} {'Credit':>12} {'Matching':<12} {'Sales Rep':<16}")
        click.echo("-" * 82)
        for row in detail.rows:
            click.echo(
                f"{truncate(row.date, 12):<12} {truncate(row.number, 14):<14} "
                f"{format_amount(row.debit):>12} {format_amount(row.credit):>12} "
                f"{truncate(row.matching, 12):<12} {truncate(row.sales_rep, 16):<16}"
            )


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(list_customers)
    cli.add_command(show_customer)
