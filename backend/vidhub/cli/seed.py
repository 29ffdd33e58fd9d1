"""Flask CLI commands for seeding a development database."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from vidhub.core.config import ENV_VAR
from vidhub.core.extensions import db
from vidhub.seeds import demo

LOGGER = logging.getLogger(__name__)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production() -> None:
    """Abort when running against a production configuration."""
    config = current_app.config
    app_env = os.getenv(ENV_VAR, "").strip().lower()
    if app_env == "production" or (not config.get("DEBUG") and not config.get("TESTING")):
        raise click.UsageError("Seeding is restricted to development and testing environments.")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(demo.__name__).setLevel(level)
    LOGGER.setLevel(level)


@seed_cli.command("demo")
@click.option("--create-tables", is_flag=True, help="Run create_all() before seeding.")
@click.pass_context
@with_appcontext
def demo_command(ctx: click.Context, create_tables: bool) -> None:
    """Populate demo users, videos, subscriptions and watch history."""
    _ensure_non_production()
    if create_tables:
        db.create_all()
    try:
        summary = demo.run_all(db, verbose=bool(ctx.obj.get("verbose", False)))
    except (SQLAlchemyError, ValueError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)
