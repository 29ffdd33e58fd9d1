"""Concrete adapters for the service-layer ports, wired per application."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask, current_app

from vidhub.core.extensions import get_redis
from vidhub.services._shared.ports import (
    InMemoryDenylistStore,
    MediaUploader,
    TokenDenylistStore,
    TokenProvider,
)

from .jwt import JWTTokenProvider
from .media import CloudinaryMediaUploader, CloudinarySettings
from .redis import RedisTokenDenylistStore


def init_app(app: Flask) -> None:
    """
    Build the token provider, media uploader and denylist for ``app``.

    Instances are stored under ``app.extensions`` so tests can swap them.

    :raises ValueError: If the access and refresh secrets are equal.
    """
    cfg = app.config
    app.extensions["token_provider"] = JWTTokenProvider(
        access_secret=cfg["ACCESS_TOKEN_SECRET"],
        refresh_secret=cfg["REFRESH_TOKEN_SECRET"],
        access_expires=timedelta(minutes=int(cfg["ACCESS_TOKEN_EXPIRES_MINUTES"])),
        refresh_expires=timedelta(days=int(cfg["REFRESH_TOKEN_EXPIRES_DAYS"])),
        algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
    )
    app.extensions["media_uploader"] = CloudinaryMediaUploader(
        CloudinarySettings(
            cloud_name=cfg.get("CLOUDINARY_CLOUD_NAME", ""),
            api_key=cfg.get("CLOUDINARY_API_KEY", ""),
            api_secret=cfg.get("CLOUDINARY_API_SECRET", ""),
            timeout=int(cfg.get("MEDIA_UPLOAD_TIMEOUT", 30)),
        )
    )
    if cfg.get("REDIS_URL"):
        app.extensions["denylist_store"] = RedisTokenDenylistStore(get_redis())
    else:
        app.extensions["denylist_store"] = InMemoryDenylistStore()


def token_provider() -> TokenProvider:
    return current_app.extensions["token_provider"]


def media_uploader() -> MediaUploader:
    return current_app.extensions["media_uploader"]


def denylist_store() -> TokenDenylistStore:
    return current_app.extensions["denylist_store"]
