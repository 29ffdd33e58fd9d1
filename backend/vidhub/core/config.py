"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``.

    Blank or non-numeric values are treated as unset.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    try:
        return int(val.strip())
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    ACCESS_TOKEN_SECRET: str
        Signing key for access tokens. Also exported as ``JWT_SECRET_KEY`` so
        ``flask-jwt-extended`` accepts the access tokens we issue.
    REFRESH_TOKEN_SECRET: str
        Signing key for refresh tokens. Must differ from the access secret.
    ACCESS_TOKEN_EXPIRES_MINUTES: int
        Access token lifetime.
    REFRESH_TOKEN_EXPIRES_DAYS: int
        Refresh token lifetime.
    JWT_TOKEN_LOCATION: list[str]
        Where request authentication looks for access tokens.
    JWT_ACCESS_COOKIE_NAME / JWT_REFRESH_COOKIE_NAME: str
        Cookie names set on login/refresh and cleared on logout.
    JWT_COOKIE_SECURE: bool
        Marks token cookies as ``Secure``.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    DB_STARTUP_CHECK: bool
        When ``True`` the factory pings the database and exits on failure.
    CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET: str
        Credentials for the media host.
    MEDIA_UPLOAD_TIMEOUT: int
        Seconds before a media upload is abandoned.
    UPLOAD_TEMP_DIR: str
        Directory where multipart files are staged before upload.
    REDIS_URL: str | None
        Backing store for the access-token denylist and rate-limit counters.
        In-memory when unset.
    AUTH_LOGIN_RATE_LIMIT: str
        flask-limiter expression applied to ``POST /users/login``.
    PASSWORD_HASH_METHOD: str
        Werkzeug hashing method (``scrypt`` by default).
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX / PROXY_HOPS: bool / int
        Trust ``X-Forwarded-*`` headers from this many proxies.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    ACCESS_TOKEN_EXPIRES_MINUTES = env_int("ACCESS_TOKEN_EXPIRES_MINUTES", 15)
    REFRESH_TOKEN_EXPIRES_DAYS = env_int("REFRESH_TOKEN_EXPIRES_DAYS", 10)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # flask-jwt-extended (request-side verification of access tokens)
    JWT_SECRET_KEY = ACCESS_TOKEN_SECRET
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_COOKIE_NAME = "accessToken"
    JWT_REFRESH_COOKIE_NAME = "refreshToken"
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", True)
    JWT_COOKIE_SAMESITE = os.getenv("JWT_COOKIE_SAMESITE", "Lax")
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_SESSION_COOKIE = False

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    DB_STARTUP_CHECK = env_bool("DB_STARTUP_CHECK", True)

    # Media host
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
    MEDIA_UPLOAD_TIMEOUT = env_int("MEDIA_UPLOAD_TIMEOUT", 30)
    UPLOAD_TEMP_DIR = os.getenv("UPLOAD_TEMP_DIR", os.path.join(tempfile.gettempdir(), "vidhub"))
    MAX_CONTENT_LENGTH = env_int("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)

    # Rate limiting (login)
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")

    # Denylist store
    REDIS_URL = os.getenv("REDIS_URL") or None

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXY_HOPS = env_int("PROXY_HOPS", 1)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and allows token cookies over plain HTTP.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    JWT_COOKIE_SECURE = env_bool("JWT_COOKIE_SECURE", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses a cheap password hash so suites stay fast.
    - Disables login rate limiting; every test client shares one address.
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    DB_STARTUP_CHECK = False
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    JWT_COOKIE_SECURE = False
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    JWT_COOKIE_SECURE = True
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
