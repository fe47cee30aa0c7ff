"""Shared CLI output helpers."""

import click

from kpoints.domain.entities import TransactionDetail
from kpoints.utils.clock import LedgerClock


def echo_transaction_table(details: list[TransactionDetail], clock: LedgerClock) -> None:
    """Print transactions as a compact table, timestamps in the reference timezone."""
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Time':<17} {'From':<20} {'To':<20} {'Pts':>3}  {'Message':<30}")
    click.echo("-" * 100)
    for detail in details:
        txn = detail.transaction
        when = clock.local(txn.created_at).strftime("%Y-%m-%d %H:%M")
        message = (txn.message or "")[:30]
        click.echo(
            f"{txn.id:<6} {when:<17} {detail.sender.display_name[:20]:<20} "
            f"{detail.receiver.display_name[:20]:<20} {txn.points:>3}  {message:<30}"
        )
