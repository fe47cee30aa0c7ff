"""Balance and limit lookup commands."""

import click
from kpoints.cli.error_handling import handle_domain_error
from kpoints.domain.daily_limit import DailyLimitTracker
from kpoints.domain.directory import UserDirectory
from kpoints.domain.errors import DomainError
from kpoints.domain.reporting import ReportingService
from kpoints.utils.date_parser import parse_date, parse_month


@click.command("balance")
@click.argument("user_id", metavar="USER_ID")
@click.pass_context
def show_balance(ctx, user_id: str):
    """Show a user's current point balance."""
    directory = UserDirectory(ctx.obj["db"], ctx.obj["config"])

    try:
        points = directory.get_balance(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{user_id}: {points} points")


@click.command("limit")
@click.argument("user_id", metavar="USER_ID")
@click.option("--date", "on_date", help="Day to check (YYYY-MM-DD, 'today' or 'yesterday'; default today)")
@click.pass_context
def show_limit(ctx, user_id: str, on_date: str | None):
    """Show how many times a user sent points on a day."""
    config = ctx.obj["config"]
    clock = ctx.obj["clock"]
    tracker = DailyLimitTracker(ctx.obj["db"], config, clock)

    day = clock.today()
    if on_date is not None:
        try:
            day = parse_date(on_date, today=clock.today())
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    count = tracker.get_send_count(user_id, day)
    click.echo(f"{user_id} sent {count}/{config.daily_send_limit} on {day.isoformat()}")


@click.command("received")
@click.argument("user_id", metavar="USER_ID")
@click.option("--month", help="Month to total (YYYY-MM, 'this month' or 'last month'; default this month)")
@click.pass_context
def show_received(ctx, user_id: str, month: str | None):
    """Show points a user received during a month."""
    clock = ctx.obj["clock"]
    reporting = ReportingService(ctx.obj["db"], ctx.obj["config"], clock)

    first_day = clock.today().replace(day=1)
    if month is not None:
        try:
            first_day = parse_month(month, today=clock.today())
        except ValueError as e:
            click.echo(f"Error: Invalid month: {e}", err=True)
            ctx.exit(1)

    try:
        total = reporting.monthly_received(user_id, first_day)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{user_id} received {total} points in {first_day.strftime('%Y-%m')}")


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(show_balance)
    cli.add_command(show_limit)
    cli.add_command(show_received)
