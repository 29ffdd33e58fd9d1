"""Health check endpoint."""

from __future__ import annotations

import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidhub.api.deps import api_response, timing
from vidhub.core.extensions import db

bp = Blueprint("health", __name__)

log = logging.getLogger(__name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report application and database health."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        log.exception("healthcheck.db_error")
        db_status = "fail"
    return api_response({"status": "ok", "db": db_status}, "Service is healthy")
