"""Department commands."""

import click
from kpoints.domain.directory import UserDirectory


@click.group()
def department_group():
    """Manage departments."""
    pass


@department_group.command("list")
@click.pass_context
def list_departments(ctx):
    """List all departments."""
    directory = UserDirectory(ctx.obj["db"], ctx.obj["config"])

    departments = directory.list_departments()
    if not departments:
        click.echo("No departments found.")
        return

    click.echo("\nDepartments:")
    click.echo("-" * 40)
    for dept in departments:
        click.echo(f"ID: {dept.id:3d} | {dept.name}")


def register_commands(cli):
    """Register department commands with main CLI."""
    cli.add_command(department_group, name="department")
