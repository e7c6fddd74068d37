"""CLI helpers for evaluation date resolution."""

from datetime import date

import click

from ledgerdesk.utils.date_parser import parse_date

AS_OF_HELP = "Evaluation date for trailing-window metrics (YYYY-MM-DD or 'today', 'yesterday'). Defaults to today."


def resolve_cli_as_of(ctx: click.Context, as_of: str | None) -> date:
    """Resolve the --as-of option, or exit with a CLI error."""
    if not as_of:
        return date.today()
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid as-of date: {e}", err=True)
        ctx.exit(1)
