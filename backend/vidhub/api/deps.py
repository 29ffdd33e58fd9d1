"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import logging
import os
import time
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from werkzeug.utils import secure_filename

from vidhub.core.logger import bind_user
from vidhub.infra import denylist_store, media_uploader, token_provider
from vidhub.services.accounts import AccountService
from vidhub.services.auth import AuthService, AuthTokenConfig
from vidhub.services.channels import ChannelService
from vidhub.services.registration import UserRegistrationService

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


# ----------------------------- Responses ------------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def api_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Wrap ``data`` in the success envelope."""

    return json_response(
        {
            "statusCode": status,
            "data": data if data is not None else {},
            "message": message,
            "success": status < 400,
        },
        status=status,
    )


# ----------------------------- Auth -----------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token (header or cookie)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        bind_user(current_user_id())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(func: F) -> F:
    """Authenticate when a token is present; anonymous requests pass through."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=True)
        bind_user(current_user_id())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int | None:
    """Return the authenticated user's id, or ``None`` for anonymous requests."""

    identity = get_jwt_identity()
    return int(identity) if identity is not None else None


def current_token_claims() -> dict[str, Any]:
    return get_jwt() or {}


# ----------------------------- Uploads --------------------------------------


@contextmanager
def staged_upload(field: str) -> Iterator[str | None]:
    """
    Save the multipart file ``field`` to ``UPLOAD_TEMP_DIR``.

    Yields the staged path, or ``None`` when the field is absent or empty.
    The file is removed on exit if the uploader left it behind.
    """

    storage = request.files.get(field)
    if storage is None or not storage.filename:
        yield None
        return

    temp_dir = current_app.config["UPLOAD_TEMP_DIR"]
    os.makedirs(temp_dir, exist_ok=True)
    name = secure_filename(storage.filename) or "upload"
    path = os.path.join(temp_dir, f"{uuid.uuid4().hex}-{name}")
    storage.save(path)
    try:
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)


# ----------------------------- Services -------------------------------------


def auth_service() -> AuthService:
    return AuthService(
        token_provider=token_provider(),
        denylist_store=denylist_store(),
        token_cfg=AuthTokenConfig(
            access_expires_minutes=int(current_app.config["ACCESS_TOKEN_EXPIRES_MINUTES"])
        ),
    )


def registration_service() -> UserRegistrationService:
    return UserRegistrationService(media_uploader=media_uploader())


def account_service() -> AccountService:
    return AccountService(media_uploader=media_uploader())


def channel_service() -> ChannelService:
    return ChannelService()


# ----------------------------- Observability --------------------------------


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
