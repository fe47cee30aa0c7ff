"""CLI capability checks for admin commands."""

from __future__ import annotations

import click
from kpoints.cli.error_handling import handle_domain_error
from kpoints.domain.directory import UserDirectory
from kpoints.domain.errors import PermissionDeniedError, admin_required


def require_admin(ctx: click.Context, directory: UserDirectory, actor_id: str) -> None:
    """Ensure the acting user is an active admin, or exit with a CLI error.

    Admin services assume an authorized caller, so this check is the one
    place the admin role is enforced.
    """
    if not directory.is_admin(actor_id):
        handle_domain_error(ctx, PermissionDeniedError(admin_required(actor_id)))
