"""JSON logging to stdout, correlated per request and per authenticated user.

Every record leaving the root handler carries ``request_id``; inside a
request it also carries ``method``, ``path`` and, once an access token has
been verified, ``user_id``. Only whitelisted ``extra=`` attributes reach the
payload, so tokens and passwords passed by mistake are dropped.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "status")

# Per-request state lives in the WSGI environ
_RID_KEY = "vidhub.request_id"
_USER_KEY = "vidhub.user_id"
_START_KEY = "vidhub.started"

# Chatty third-party loggers kept at WARNING unless LOG_LEVEL is DEBUG
_NOISY = ("urllib3", "werkzeug", "sqlalchemy.engine")

log = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key in ("method", "path"):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Attach request id, route and caller to records emitted during a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True
        record.request_id = ensure_request_id()
        record.method = request.method
        record.path = request.path
        if not hasattr(record, "user_id"):
            caller = request.environ.get(_USER_KEY)
            if caller is not None:
                record.user_id = caller
        return True


def ensure_request_id() -> str:
    """Return the request id, reusing ``X-Request-ID`` / ``X-Correlation-ID``.

    Outside a request a fresh uuid4 is returned each call.
    """

    if not has_request_context():
        return str(uuid4())
    rid = request.environ.get(_RID_KEY)
    if rid:
        return rid
    rid = next((request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None)
    request.environ[_RID_KEY] = rid or str(uuid4())
    return request.environ[_RID_KEY]


def bind_user(user_id: int | None) -> None:
    """Remember the authenticated caller so later records carry ``user_id``."""

    if has_request_context():
        request.environ[_USER_KEY] = user_id


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.strip().upper(), logging.INFO)


def configure_logging(level: str | int = "INFO") -> None:
    """Install the JSON stdout handler on the root logger (idempotent)."""

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)

    for name in _NOISY:
        logging.getLogger(name).setLevel(resolved if resolved <= logging.DEBUG else logging.WARNING)


def init_app(app: Flask) -> None:
    """Seed a request id, echo it back, and log one line per finished request."""

    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _start_request() -> None:
        ensure_request_id()
        request.environ[_START_KEY] = time.perf_counter()

    @app.after_request
    def _finish_request(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = request.environ.pop(_START_KEY, None)
        if started is not None:
            log.info(
                "request.completed",
                extra={
                    "status": response.status_code,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        return response


__all__ = ["bind_user", "configure_logging", "ensure_request_id", "init_app"]
