"""Reverse-proxy awareness for the WSGI app."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`ProxyFix` unless ``USE_PROXYFIX`` is off.

    ``PROXY_HOPS`` sets how many ``X-Forwarded-*`` hops are trusted. Secure
    token cookies rely on the scheme Flask sees behind TLS termination.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXY_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
