"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Constraint names are referenced by services when mapping IntegrityError
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)
redis_client: redis.Redis | None = None


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT, rate limiting and (optionally) Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidhub.models` package so SQLAlchemy metadata is complete for
        migrations.

    Raises
    ------
    RuntimeError
        If ``REDIS_URL`` is configured but the server cannot be reached.
    """
    # Request-side verification must use the same key the issuer signs with.
    app.config["JWT_SECRET_KEY"] = app.config.get("ACCESS_TOKEN_SECRET", app.config.get("JWT_SECRET_KEY"))
    # Cookie max-age follows the token lifetimes
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=int(app.config.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15))
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=int(app.config.get("REFRESH_TOKEN_EXPIRES_DAYS", 10))
    )

    db.init_app(app)

    from vidhub import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    # Share counters across workers when Redis is available
    app.config.setdefault("RATELIMIT_STORAGE_URI", app.config.get("REDIS_URL") or "memory://")
    limiter.init_app(app)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return redis_client
