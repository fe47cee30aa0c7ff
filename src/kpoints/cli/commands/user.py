"""User management commands."""

import click
from kpoints.cli.error_handling import handle_domain_error
from kpoints.domain.daily_limit import DailyLimitTracker
from kpoints.domain.directory import UserDirectory
from kpoints.domain.errors import DomainError
from kpoints.domain.reporting import ReportingService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("add")
@click.argument("user_id", metavar="USER_ID")
@click.option("--first", "first_name", help="First name")
@click.option("--last", "last_name", help="Last name")
@click.option("--email", help="Email address")
@click.option("--department", help="Department name (created if missing)")
@click.option("--role", type=click.Choice(["user", "admin"]), help="Role (defaults to user for new users)")
@click.pass_context
def add_user(
    ctx,
    user_id: str,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    department: str | None,
    role: str | None,
):
    """Register a user, as on first login.

    New users get the starting balance, capped so total circulation stays
    within the ceiling. Running it for an existing user updates the profile
    and keeps the balance.

    Examples:
        kpoints user add u123 --first Hanako --last Yamada --department Sales
        kpoints user add boss --role admin
    """
    db = ctx.obj["db"]
    directory = UserDirectory(db, ctx.obj["config"])
    existed = directory.get_user(user_id) is not None

    try:
        registered = directory.register_user(
            user_id=user_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            department=department,
            role=role,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if existed:
        click.echo(f"Updated user '{registered.id}'")
    else:
        click.echo(f"Created user '{registered.id}' with {registered.point_balance} points")


@user_group.command("list")
@click.option("--department", help="Only users in this department")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated users")
@click.pass_context
def list_users(ctx, department: str | None, include_inactive: bool):
    """List users and balances."""
    db = ctx.obj["db"]
    directory = UserDirectory(db, ctx.obj["config"])

    users = directory.list_users(department=department, include_inactive=include_inactive)
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for u in users:
        status = "" if u.is_active else " (inactive)"
        click.echo(
            f"{u.id:<12} | {u.display_name:<20} | {u.department:<15} | "
            f"{u.role.value:<5} | {u.point_balance:>4} pts{status}"
        )


@user_group.command("show")
@click.argument("user_id", metavar="USER_ID")
@click.pass_context
def show_user(ctx, user_id: str):
    """Show a user's balance and today's activity."""
    db = ctx.obj["db"]
    config = ctx.obj["config"]
    clock = ctx.obj["clock"]
    directory = UserDirectory(db, config)
    tracker = DailyLimitTracker(db, config, clock)
    reporting = ReportingService(db, config, clock)

    try:
        u = directory.require_user(user_id)
        received = reporting.monthly_received(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    sent_today = tracker.get_send_count(user_id)
    click.echo(f"User: {u.display_name} ({u.id})")
    click.echo(f"  Department: {u.department}")
    click.echo(f"  Role: {u.role.value}")
    click.echo(f"  Active: {'yes' if u.is_active else 'no'}")
    click.echo(f"  Balance: {u.point_balance} points")
    click.echo(f"  Sent today: {sent_today}/{config.daily_send_limit}")
    click.echo(f"  Received this month: {received} points")


@user_group.command("deactivate")
@click.argument("user_id", metavar="USER_ID")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def deactivate_user(ctx, user_id: str, yes: bool):
    """Deactivate a user. Users are never deleted.

    A deactivated user can no longer send or receive points, and their
    balance no longer counts towards circulation.
    """
    db = ctx.obj["db"]
    directory = UserDirectory(db, ctx.obj["config"])

    if not yes and not click.confirm(f"Are you sure you want to deactivate user '{user_id}'?"):
        click.echo("Deactivation cancelled.")
        return

    try:
        directory.deactivate_user(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated user '{user_id}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
