"""Flask CLI commands for inspecting and pruning refresh sessions."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from tokenauth.core.extensions import get_auth_service

LOGGER = logging.getLogger(__name__)


@click.group("sessions")
def sessions_cli() -> None:
    """Inspect and maintain the in-process refresh session store."""


@sessions_cli.command("sweep")
@with_appcontext
def sweep_command() -> None:
    """Remove every expired session now."""
    removed = get_auth_service().sweep_expired_sessions()
    click.echo(f"Removed {removed} expired session(s).")


@sessions_cli.command("stats")
@with_appcontext
def stats_command() -> None:
    """Print a masked summary of the tracked sessions."""
    stats = get_auth_service().session_stats()
    click.echo(f"Total sessions: {stats.total}")
    for s in stats.sessions:
        flag = "  expired" if s.is_expired else ""
        click.echo(
            f"  {s.token_prefix}  owner={s.owner}"
            f"  issued={s.issued_at.isoformat()}  expires={s.expires_at.isoformat()}{flag}"
        )


@sessions_cli.command("revoke-user")
@click.argument("username")
@with_appcontext
def revoke_user_command(username: str) -> None:
    """Terminate every session belonging to USERNAME."""
    removed = get_auth_service().revoke_all_sessions(username)
    LOGGER.debug("cli.revoke_user", extra={"subject": username, "removed": removed})
    click.echo(f"Revoked {removed} session(s) for {username}.")
