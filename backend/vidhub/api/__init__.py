"""API blueprint package aggregating versioned endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, e.g. ``"/api/v1"``.
    entries:
        ``(blueprint, relative_prefix)`` pairs; an empty relative prefix
        mounts the blueprint at the version root.
    """

    for bp, rel_prefix in entries:
        segments = [base_prefix.rstrip("/"), rel_prefix.strip("/")]
        full_prefix = "/".join(s for s in segments if s)
        if not full_prefix.startswith("/"):
            full_prefix = "/" + full_prefix
        app.register_blueprint(bp, url_prefix=full_prefix)


def init_app(app: Flask) -> None:
    """Register the available API versions on the Flask app."""

    api_base = app.config.get("API_BASE_PREFIX", "/api")

    from vidhub.api.v1 import API_VERSION as V1
    from vidhub.api.v1 import REGISTRY as V1_REGISTRY

    register_blueprint_group(app, base_prefix=f"{api_base}/{V1}", entries=V1_REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
