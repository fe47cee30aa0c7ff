"""Transaction history command."""

import click
from kpoints.cli.error_handling import handle_domain_error
from kpoints.cli.formatting import echo_transaction_table
from kpoints.domain.errors import DomainError
from kpoints.domain.ledger import LedgerService


@click.command("history")
@click.option("--user", "user_id", help="Only transactions sent or received by this user")
@click.option("--recent", is_flag=True, help="Show only the latest transactions (default limit 10)")
@click.option("--limit", type=int, help="Maximum number of transactions (default 50, or 10 with --recent)")
@click.option("--offset", type=int, default=0, show_default=True, help="Number of transactions to skip")
@click.pass_context
def show_history(ctx, user_id: str | None, recent: bool, limit: int | None, offset: int):
    """View transaction history, newest first.

    Examples:
        kpoints history --limit 20 --offset 40
        kpoints history --user u123
        kpoints history --recent
    """
    db = ctx.obj["db"]
    service = LedgerService(db, ctx.obj["config"], ctx.obj["clock"])

    if user_id is not None and (recent or limit is not None or offset):
        click.echo("Error: --user cannot be combined with --recent, --limit or --offset.", err=True)
        ctx.exit(1)

    try:
        if user_id is not None:
            details = service.user_transactions(user_id)
        elif recent:
            details = service.recent_transactions(limit if limit is not None else 10)
        else:
            details = service.transaction_history(limit if limit is not None else 50, offset)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not details:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(details)} transaction(s):")
    echo_transaction_table(details, ctx.obj["clock"])


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(show_history)
