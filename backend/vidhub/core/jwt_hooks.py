"""flask-jwt-extended callbacks: denylist, user lookup and 401 envelopes."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask

from vidhub.core.errors import error_response
from vidhub.core.extensions import jwt
from vidhub.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def _unauthorized(message: str):
    log.warning("Auth rejected: %s request_id=%s", message, ensure_request_id())
    return error_response(HTTPStatus.UNAUTHORIZED, message)


def init_app(app: Flask) -> None:
    """Register the JWT callbacks. Call after :func:`vidhub.infra.init_app`."""

    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]) -> bool:
        from vidhub.infra import denylist_store

        jti = jwt_payload.get("jti")
        return bool(jti) and denylist_store().is_revoked(jti)

    @jwt.user_lookup_loader
    def _load_user(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        from vidhub.repositories.user import UserRepository

        try:
            user_id = int(jwt_payload["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return UserRepository().get(user_id)

    @jwt.expired_token_loader
    def _expired(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Token has expired")

    @jwt.invalid_token_loader
    def _invalid(reason: str):
        return _unauthorized("Invalid access token")

    @jwt.unauthorized_loader
    def _missing(reason: str):
        return _unauthorized("Unauthorized request")

    @jwt.revoked_token_loader
    def _revoked(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Token has been revoked")

    @jwt.user_lookup_error_loader
    def _user_gone(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Invalid access token")
