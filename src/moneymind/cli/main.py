"""Main CLI entry point."""

import logging

import click
from moneymind.cli.error_handling import handle_domain_error
from moneymind.database.factories import create_database
from moneymind.domain.errors import StoreUnavailableError

# Import and register all commands at module level
from moneymind.cli.commands import (
    user,
    transaction,
    goal,
    dashboard,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides MONEYMIND_DB_PATH environment variable)",
    envvar="MONEYMIND_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides --db-path)",
    envvar="MONEYMIND_DATABASE_URL",
)
@click.option("--email", help="Account email", envvar="MONEYMIND_EMAIL")
@click.option("--password", help="Account password", envvar="MONEYMIND_PASSWORD")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    database_url: str | None,
    email: str | None,
    password: str | None,
    verbose: bool,
):
    """MoneyMind - Personal finance tracker.

    Record income and expenses, track savings goals, and see where your money
    goes month by month.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["email"] = email
    ctx.obj["password"] = password

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_database(database_url=database_url, database_path=db_path)
        except StoreUnavailableError as e:
            handle_domain_error(ctx, e)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
transaction.register_commands(cli)
goal.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
