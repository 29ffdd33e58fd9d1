"""Centralized JSON error handling for the API.

Every failure leaves the application as the standard envelope::

    {"statusCode": 404, "message": "...", "errors": [], "data": null, "success": false}
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from vidhub.core.logger import ensure_request_id
from vidhub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)

log = logging.getLogger(__name__)


def error_envelope(
    *,
    status: int,
    message: str,
    errors: list[Any] | None = None,
) -> dict[str, Any]:
    """
    Build the failure envelope.

    :param status: HTTP status code.
    :param message: Human-readable error summary (safe for clients).
    :param errors: Optional structured details (e.g. per-field messages).
    :returns: Envelope dictionary.
    :rtype: dict
    """
    return {
        "statusCode": int(status),
        "message": message,
        "errors": list(errors or []),
        "data": None,
        "success": False,
    }


def error_response(
    status: int,
    message: str,
    errors: list[Any] | None = None,
) -> tuple[Response, int]:
    """Return ``(response, status)`` carrying the failure envelope."""
    return jsonify(error_envelope(status=status, message=message, errors=errors)), int(status)


class APIError(Exception):
    """
    Represent an HTTP-aware error raised from the API layer.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list | None, optional
        Structured details included in the ``errors`` field.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = errors or []

    def to_envelope(self) -> dict[str, Any]:
        """Serialize into the failure envelope."""
        return error_envelope(status=self.status_code, message=self.message, errors=self.errors)


# Domain conveniences
class BadRequest(APIError):
    """400 for missing or malformed input."""

    def __init__(self, message: str = "Bad request", errors: list[Any] | None = None) -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, errors=errors)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class InternalServerError(APIError):
    """500 for collaborator failures that are safe to describe."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-level error to its HTTP counterpart.

    :param exc: Error raised within a service.
    :type exc: ServiceError
    :returns: API error carrying the status code and a client-safe message.
    :rtype: APIError
    """
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))
    if isinstance(exc, ConflictError):
        return Conflict(str(exc))
    if isinstance(exc, UnauthorizedError):
        return Unauthorized(str(exc))
    if isinstance(exc, InternalError):
        return InternalServerError(str(exc))
    if isinstance(exc, ValidationError):
        errors = [{"field": exc.field, "messages": [str(exc)]}] if exc.field else None
        return BadRequest(str(exc), errors=errors)
    # Any other ServiceError subclass -> 400 Bad Request
    return BadRequest(str(exc))


def _marshmallow_errors(messages: Any) -> list[dict[str, Any]]:
    """Flatten marshmallow's ``{field: [msg, ...]}`` into a list of entries."""
    if isinstance(messages, dict):
        out: list[dict[str, Any]] = []
        for field, msgs in messages.items():
            out.append({"field": field, "messages": msgs if isinstance(msgs, list) else [msgs]})
        return out
    if isinstance(messages, list):
        return [{"field": None, "messages": messages}]
    return [{"field": None, "messages": [str(messages)]}]


def _log_api_error(err: APIError) -> None:
    # 4xx -> warning; 5xx -> error
    level = log.error if err.status_code >= 500 else log.warning
    level(
        "APIError: status=%s msg=%s request_id=%s",
        err.status_code,
        err.message,
        ensure_request_id(),
    )


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Guarantees the failure envelope for all handled errors.
    - Emits 5xx with ``exc_info`` for traceability; 4xx as warnings.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        _log_api_error(err)
        return jsonify(err.to_envelope()), err.status_code

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = translate_service_error(err)
        _log_api_error(api_err)
        return jsonify(api_err.to_envelope()), api_err.status_code

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        log.warning("ValidationError: request_id=%s", ensure_request_id())
        return error_response(
            HTTPStatus.BAD_REQUEST,
            "Validation failed",
            _marshmallow_errors(err.messages),
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        level = log.error if status >= 500 else log.warning
        level("HTTPException: status=%s detail=%s request_id=%s", status, message, ensure_request_id())
        return error_response(status, message)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Do not leak raw DB errors to clients
        log.error("IntegrityError: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.CONFLICT, "Resource conflict")

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        log.error("OperationalError: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Never leak internal details
        log.error("Unhandled exception: request_id=%s", ensure_request_id(), exc_info=True)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error")
