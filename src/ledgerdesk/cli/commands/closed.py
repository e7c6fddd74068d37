"""Closed customer commands."""

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.closed_customers import ClosedCustomerService
from ledgerdesk.domain.errors import DomainError


@click.group("closed")
def closed_group():
    """Manage closed customers (always rated Bad)."""
    pass


@closed_group.command("add")
@click.argument("name")
@click.pass_context
def add_closed(ctx, name: str):
    """Mark a customer as closed."""
    service = ClosedCustomerService(ctx.obj["db"])
    try:
        service.close_customer(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Closed customer '{name.strip()}'")


@closed_group.command("list")
@click.pass_context
def list_closed(ctx):
    """List closed customers."""
    names = ClosedCustomerService(ctx.obj["db"]).list_closed()
    if not names:
        click.echo("No closed customers.")
        return
    for name in names:
        click.echo(name)


def register_commands(cli):
    """Register closed customer commands with main CLI."""
    cli.add_command(closed_group)
