"""Main CLI entry point."""

import logging

import click
from ledgerdesk.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerdesk.cli.commands import (
    import_cmd,
    customers,
    rollups,
    inventory,
    closed,
    reconcile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERDESK_DB_PATH environment variable)",
    envvar="LEDGERDESK_DB_PATH",
)
@click.option(
    "--user",
    help="Current user, recorded on imported transfers without a user column",
    envvar="LEDGERDESK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, log_level: str):
    """Ledgerdesk - back-office ledger and inventory analysis.

    Rates customers from the debit/credit ledger, rolls results up per
    sales rep and period, and tracks stock held by persons from the
    transfer log.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user"] = user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
import_cmd.register_commands(cli)
customers.register_commands(cli)
rollups.register_commands(cli)
inventory.register_commands(cli)
closed.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
