"""Main CLI entry point."""

import logging

import click
from goldnotebook.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from goldnotebook.domain.transaction import TransactionService

# Import and register all commands at module level
from goldnotebook.cli.commands import backup, chart, summary, trade, transaction


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Gold Notebook - track gold purchases and sales in MYR.

    Records buys and sells, keeps a weighted-average cost basis, and reports
    realized profit/loss and performance over time.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["transactions"] = TransactionService(db)
        ctx.call_on_close(db.disconnect)


# Register all commands
trade.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)
chart.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
