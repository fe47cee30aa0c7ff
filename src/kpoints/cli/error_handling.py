"""CLI error handling helpers."""

import logging

import click

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: Exception) -> None:
    """Render a domain or input error on stderr and exit with status 1.

    Every command reports failures the same way: one `Error: <message>` line,
    with the error kind left to the debug log.
    """
    logger.debug("%s failed with %s", ctx.command_path, type(error).__name__)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
