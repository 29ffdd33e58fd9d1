"""Database bootstrap check run once at process start.

The check is fatal and never retried; the process supervisor restarts us.
"""

from __future__ import annotations

import logging
import sys

from flask import Flask
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidhub.core.extensions import db

log = logging.getLogger(__name__)


def verify_connection(app: Flask) -> None:
    """Ping the configured database or terminate the process.

    :param app: Application whose ``SQLALCHEMY_DATABASE_URI`` is checked.
    :type app: flask.Flask
    :raises SystemExit: With status ``1`` when the database is unreachable.
    """
    with app.app_context():
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            log.critical("Database connection failed: %s", exc)
            sys.exit(1)
        log.info("Database connected: %s", db.engine.url.render_as_string(hide_password=True))
