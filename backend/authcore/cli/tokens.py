"""Flask CLI commands for out-of-band refresh token administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from authcore.infra.sqlalchemy.refresh_token_store import SQLAlchemyRefreshTokenStore
from authcore.services._shared.base import utc_now
from authcore.services._shared.errors import PersistenceError
from authcore.services.auth.tokens import evaluate_refresh_token

LOGGER = logging.getLogger(__name__)


@click.group("tokens")
def tokens_cli() -> None:
    """Refresh token administration (never exposed over HTTP)."""


@tokens_cli.command("revoke")
@click.argument("token")
@with_appcontext
def revoke_command(token: str) -> None:
    """Mark TOKEN as revoked. Later refresh calls with it are rejected."""
    store = SQLAlchemyRefreshTokenStore()
    try:
        revoked = store.mark_revoked(token)
    except PersistenceError as exc:
        LOGGER.exception("Refresh token revoke failed")
        raise click.ClickException(str(exc)) from exc
    if not revoked:
        raise click.ClickException("Refresh token not found.")
    LOGGER.info("Refresh token revoked from CLI", extra={"event": "refresh_revoked"})
    click.echo("Refresh token revoked.")


@tokens_cli.command("status")
@click.argument("token")
@with_appcontext
def status_command(token: str) -> None:
    """Print the current validity state of TOKEN and its audit metadata."""
    store = SQLAlchemyRefreshTokenStore()
    try:
        view = store.find_by_token(token)
    except PersistenceError as exc:
        LOGGER.exception("Refresh token lookup failed")
        raise click.ClickException(str(exc)) from exc
    state = evaluate_refresh_token(view, utc_now())
    click.echo(f"state:      {state.value}")
    if view is None:
        return
    click.echo(f"user:       {view.user.email} (id={view.user.id})")
    click.echo(f"expires_at: {view.expires_at.isoformat()}")
    click.echo(f"revoked:    {str(view.revoked).lower()}")
    click.echo(f"ip_address: {view.ip_address}")
    click.echo(f"user_agent: {view.user_agent}")
