"""Point transfer command."""

import click
from kpoints.cli.error_handling import handle_domain_error
from kpoints.domain.directory import UserDirectory
from kpoints.domain.errors import DomainError
from kpoints.domain.ledger import LedgerService
from kpoints.utils.points_parser import parse_points


@click.command("send")
@click.argument("sender_id", metavar="SENDER")
@click.argument("receiver_id", metavar="RECEIVER")
@click.argument("points", metavar="POINTS")
@click.option("--message", "-m", help="Thank-you message")
@click.pass_context
def send_points(ctx, sender_id: str, receiver_id: str, points: str, message: str | None):
    """Send POINTS (1-3) from SENDER to RECEIVER.

    Examples:
        kpoints send u123 u456 3 -m "Thanks for the review!"
        kpoints send u123 u789 1
    """
    db = ctx.obj["db"]
    service = LedgerService(db, ctx.obj["config"], ctx.obj["clock"])

    try:
        amount = parse_points(points)
    except ValueError as e:
        click.echo(f"Error: Invalid points: {e}", err=True)
        ctx.exit(1)

    try:
        txn = service.transfer(sender_id, receiver_id, amount, message)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Sent {txn.points} point{'s' if txn.points != 1 else ''} to '{receiver_id}' (Transaction ID: {txn.id})")
    remaining = service.limits.remaining_sends(sender_id)
    current = UserDirectory(db, ctx.obj["config"]).get_balance(sender_id)
    click.echo(f"Balance: {current} points, {remaining} send{'s' if remaining != 1 else ''} left today")


def register_commands(cli):
    """Register send command with main CLI."""
    cli.add_command(send_points)
