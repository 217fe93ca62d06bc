"""Main CLI entry point."""

import logging

import click

from boojet.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from boojet.domain.category import CategoryService
from boojet.logging_config import configure_logging

# Import and register all commands at module level
from boojet.cli.commands import (
    account,
    add,
    category,
    plan,
    report,
    summary,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    envvar="BOOJET_VERBOSE",
    help="Log engine activity to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """boojet - Personal ledger and income projection.

    Record income and expenses against accounts, plan recurring income and
    compare what you expected to earn with what actually came in.
    """
    ctx.ensure_object(dict)
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        CategoryService(db).ensure_system_categories()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
plan.register_commands(cli)
category.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
