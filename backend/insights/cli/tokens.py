"""Flask CLI commands for access token maintenance."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from insights.services.registry import get_services

LOGGER = logging.getLogger(__name__)


@click.group("tokens")
def tokens_cli() -> None:
    """Access token maintenance commands."""


@tokens_cli.command("prune")
@click.option("--dry-run", is_flag=True, help="Only count expired tokens; delete nothing.")
@with_appcontext
def prune(dry_run: bool) -> None:
    """Delete access tokens whose expiry has passed."""
    count = get_services().tokens.prune_expired(dry_run=dry_run)
    if dry_run:
        click.echo(f"{count} expired access token(s) would be removed.")
    else:
        LOGGER.info("Pruned %s expired access tokens", count)
        click.echo(f"Removed {count} expired access token(s).")
