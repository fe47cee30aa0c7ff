"""Admin commands: statistics, import, export and quarterly reset."""

import click
from kpoints.cli.authorization import require_admin
from kpoints.cli.error_handling import handle_domain_error
from kpoints.domain.admin import AdminService
from kpoints.domain.directory import UserDirectory
from kpoints.domain.errors import DomainError
from kpoints.domain.export import ExportService
from kpoints.domain.reporting import ReportingService
from kpoints.domain.user_import import UserImportService


@click.group()
@click.option(
    "--as",
    "actor_id",
    required=True,
    envvar="KPOINTS_ADMIN_ID",
    help="ID of the admin running the command (or KPOINTS_ADMIN_ID)",
)
@click.pass_context
def admin_group(ctx, actor_id: str):
    """Administrative operations (admin role required)."""
    require_admin(ctx, UserDirectory(ctx.obj["db"], ctx.obj["config"]), actor_id)


@admin_group.command("stats")
@click.pass_context
def show_stats(ctx):
    """Show system-wide statistics."""
    config = ctx.obj["config"]
    reporting = ReportingService(ctx.obj["db"], config, ctx.obj["clock"])

    stats = reporting.system_stats()
    click.echo("\nSystem statistics:")
    click.echo(f"  Active users: {stats.total_users}")
    click.echo(f"  Transactions today: {stats.today_transactions}")
    click.echo(f"  Active departments: {stats.active_departments}")
    click.echo(f"  Total circulation: {stats.total_circulation}/{config.circulation_ceiling} points")


@admin_group.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_users(ctx, csv_file: str):
    """Bulk import users from a CSV file.

    The file needs a header row with user_id, first_name and last_name;
    department, initial_balance and role are optional. Existing users keep
    their balance.
    """
    service = UserImportService(ctx.obj["db"], ctx.obj["config"])

    try:
        result = service.import_csv(csv_file)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} users")
    click.echo(f"  Updated: {result['updated']} users")
    click.echo(f"  Skipped: {result['skipped']} incomplete rows")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)


@admin_group.command("export-transactions")
@click.argument("csv_file", type=click.Path(dir_okay=False, writable=True))
@click.option("--limit", type=click.IntRange(min=1), default=1000, show_default=True, help="Newest N transactions")
@click.pass_context
def export_transactions(ctx, csv_file: str, limit: int):
    """Export transaction history to a CSV file."""
    service = ExportService(ctx.obj["db"], ctx.obj["config"], ctx.obj["clock"])

    count = service.export_transaction_history(csv_file, limit=limit)
    click.echo(f"Exported {count} transaction(s) to {csv_file}")


@admin_group.command("export-balances")
@click.argument("csv_file", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_balances(ctx, csv_file: str):
    """Export active users' balances to a CSV file."""
    service = ExportService(ctx.obj["db"], ctx.obj["config"], ctx.obj["clock"])

    count = service.export_user_balances(csv_file)
    click.echo(f"Exported {count} user balance(s) to {csv_file}")


@admin_group.command("reset-quarterly")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def reset_quarterly(ctx, yes: bool):
    """Reset every active user's balance to the starting balance.

    This cannot be undone.
    """
    config = ctx.obj["config"]
    service = AdminService(ctx.obj["db"], config)

    if not yes and not click.confirm(
        f"Reset every active user's balance to {config.starting_balance} points? This cannot be undone."
    ):
        click.echo("Reset cancelled.")
        return

    try:
        count = service.reset_quarterly_points()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Reset {count} user(s) to {config.starting_balance} points")


def register_commands(cli):
    """Register admin commands with main CLI."""
    cli.add_command(admin_group, name="admin")
