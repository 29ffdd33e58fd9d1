"""Cross-origin policy for the JSON API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from vidhub.core.logger import CORRELATION_HEADERS, REQUEST_ID_HEADER

API_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]


def parse_origins(raw: str | None) -> list[str]:
    """Split the comma-separated ``CORS_ORIGINS`` value; ``[]`` means any origin."""
    origins = [o.strip().rstrip("/") for o in (raw or "").split(",") if o.strip()]
    return [] if origins == ["*"] else origins


def init_app(app: Flask) -> None:
    """Apply the CORS policy to ``/api/*``.

    Token cookies only travel cross-origin with credentials, which browsers
    refuse for a wildcard origin. Credentials are therefore enabled only when
    ``CORS_ORIGINS`` lists explicit origins.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))

    CORS(
        app,
        resources={r"/api/*": {"origins": origins or "*"}},
        methods=API_METHODS,
        allow_headers=["Authorization", "Content-Type", *CORRELATION_HEADERS],
        expose_headers=[REQUEST_ID_HEADER],
        supports_credentials=bool(origins),
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
