"""Sales rep and period rollup commands."""

import click
from ledgerdesk.cli.date_filters import AS_OF_HELP, resolve_cli_as_of
from ledgerdesk.cli.formatting import format_amount, format_rate, truncate
from ledgerdesk.domain.analysis import AnalysisService


def _echo_header(label: str, width: int, with_ratings: bool) -> None:
    header = f"{label:<{width}} {'Debit':>14} {'Credit':>14} {'Net Debt':>14} {'Coll.':>7} {'Txns':>6}"
    if with_ratings:
        header += f" {'Good':>5} {'Med':>5} {'Bad':>5}"
    click.echo(header)
    click.echo("-" * len(header))


def _echo_line(label: str, width: int, item, with_ratings: bool) -> None:
    line = (
        f"{truncate(label, width):<{width}} {format_amount(item.total_debit):>14} "
        f"{format_amount(item.total_credit):>14} {format_amount(item.net_debt):>14} "
        f"{format_rate(item.collection_rate):>7} {item.transaction_count:>6}"
    )
    if with_ratings:
        line += (
            f" {item.good_customers_count:>5} {item.medium_customers_count:>5}"
            f" {item.bad_customers_count:>5}"
        )
    click.echo(line)


@click.command("reps")
@click.option("--as-of", help=AS_OF_HELP)
@click.option("--search", help="Filter by sales rep name")
@click.pass_context
def sales_reps(ctx, as_of: str | None, search: str | None):
    """Summarize debt, collection rate and customer ratings per sales rep.

    A customer counts toward every rep that appears on its rows.
    """
    evaluation_date = resolve_cli_as_of(ctx, as_of)
    reps = AnalysisService(ctx.obj["db"]).sales_rep_report(evaluation_date, search=search)

    if not reps:
        click.echo("No sales reps found.")
        return

    _echo_header("Sales Rep", 24, with_ratings=True)
    for rep in reps:
        label = f"{rep.sales_rep or '(none)'} [{rep.customer_count}]"
        _echo_line(label, 24, rep, with_ratings=True)


@click.command("years")
@click.option("--as-of", help=AS_OF_HELP)
@click.pass_context
def years(ctx, as_of: str | None):
    """Summarize debtor activity and customer ratings per year."""
    evaluation_date = resolve_cli_as_of(ctx, as_of)
    periods = AnalysisService(ctx.obj["db"]).year_report(evaluation_date)

    if not periods:
        click.echo("No debtor activity found.")
        return

    _echo_header("Year", 8, with_ratings=True)
    for period in periods:
        _echo_line(period.period, 8, period, with_ratings=True)


@click.command("months")
@click.pass_context
def months(ctx):
    """Summarize ledger totals per month."""
    periods = AnalysisService(ctx.obj["db"]).month_report()

    if not periods:
        click.echo("No dated ledger rows found.")
        return

    _echo_header("Month", 8, with_ratings=False)
    for period in periods:
        _echo_line(period.period, 8, period, with_ratings=False)


def register_commands(cli):
    """Register rollup commands with main CLI."""
    cli.add_command(sales_reps)
    cli.add_command(years)
    cli.add_command(months)
