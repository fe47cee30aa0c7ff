"""Department rankings command."""

import click
from kpoints.domain.reporting import ReportingService


@click.command("rankings")
@click.pass_context
def show_rankings(ctx):
    """Rank departments by the total balance of their active members."""
    reporting = ReportingService(ctx.obj["db"], ctx.obj["config"], ctx.obj["clock"])

    rankings = reporting.department_rankings()
    if not rankings:
        click.echo("No departments found.")
        return

    click.echo("\nDepartment rankings:")
    click.echo("-" * 60)
    for position, ranking in enumerate(rankings, start=1):
        click.echo(
            f"{position:>3}. {ranking.name:<25} {ranking.total_points:>6} pts  "
            f"({ranking.member_count} member{'s' if ranking.member_count != 1 else ''})"
        )


def register_commands(cli):
    """Register rankings command with main CLI."""
    cli.add_command(show_rankings)
