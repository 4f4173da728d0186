"""Main CLI entry point."""

import click
from finmetrics.config import DB_PATH_ENV, LOG_LEVEL_ENV
from finmetrics.database.factories import create_sqlite_database
from finmetrics.logging_config import setup_logging

# Import and register all commands at module level
from finmetrics.cli.commands import (
    budget,
    health,
    networth,
    report,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help=f"Logging level (overrides {LOG_LEVEL_ENV} environment variable)",
    envvar=LOG_LEVEL_ENV,
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Finmetrics - personal finance metrics.

    Record income, expenses, assets and liabilities, then derive budgets,
    net worth, savings goals, income and expense reports and an overall
    financial health score.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
transaction.register_commands(cli)
budget.register_commands(cli)
networth.register_commands(cli)
report.register_commands(cli)
health.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
