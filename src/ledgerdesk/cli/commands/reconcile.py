"""Discount reconciliation commands."""

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.reconciliation import ReconciliationService
from ledgerdesk.utils.month_keys import format_month_token


def _echo_months(name: str, months: list[str]) -> None:
    tokens = ", ".join(format_month_token(m) for m in months) or "none"
    click.echo(f"{name}: {tokens}")


@click.group("reconcile")
def reconcile_group():
    """Track reconciled discount months per customer."""
    pass


@reconcile_group.command("mark")
@click.argument("customer")
@click.argument("month")
@click.pass_context
def mark(ctx, customer: str, month: str):
    """Mark MONTH (YYYY-MM, JAN25, JAN) reconciled for CUSTOMER."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        months = service.mark_month(customer, month)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_months(customer.strip(), months)


@reconcile_group.command("unmark")
@click.argument("customer")
@click.argument("month")
@click.pass_context
def unmark(ctx, customer: str, month: str):
    """Clear the reconciled flag of MONTH for CUSTOMER."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        months = service.unmark_month(customer, month)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_months(customer.strip(), months)


@reconcile_group.command("list")
@click.pass_context
def list_entries(ctx):
    """List discount tracker customers and their reconciled months."""
    entries = ReconciliationService(ctx.obj["db"]).list_entries()
    if not entries:
        click.echo("No discount tracker entries.")
        return
    for entry in entries:
        _echo_months(entry.customer_name, list(entry.reconciliation_months))


def register_commands(cli):
    """Register reconciliation commands with main CLI."""
    cli.add_command(reconcile_group)
