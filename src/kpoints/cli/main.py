"""Main CLI entry point."""

import logging

import click
from kpoints.config import ConfigError, load_config
from kpoints.database.factories import create_database, create_sqlite_database
from kpoints.utils.clock import LedgerClock

# Import and register all commands at module level
from kpoints.cli.commands import (
    user,
    department,
    send,
    balance,
    history,
    rankings,
    admin,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides KPOINTS_DB_PATH environment variable)",
    envvar="KPOINTS_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL, e.g. for a shared PostgreSQL server (overrides --db-path)",
    envvar="KPOINTS_DATABASE_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="KPOINTS_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, log_level: str):
    """K-Points - Peer recognition point ledger.

    Send 1-3 points with a thank-you message to colleagues. Each user can
    send three times a day; total circulation is fixed.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            config = load_config()
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        if database_url:
            db = create_database(database_url)
        else:
            db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["config"] = config
        ctx.obj.setdefault("clock", LedgerClock(config.timezone))


# Register all commands
user.register_commands(cli)
department.register_commands(cli)
send.register_commands(cli)
balance.register_commands(cli)
history.register_commands(cli)
rankings.register_commands(cli)
admin.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
