"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
They are the contract between repositories, domain models and application
services. ``vidhub/core/errors.py`` translates them into response envelopes.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the columns
    (``UNIQUE constraint failed: users.email``), so both shapes are checked.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :type exc: IntegrityError
    :param constraint_name: Constraint name, e.g. ``"uq_users_email"``.
    :type constraint_name: str
    :returns: ``True`` if the error matches the given constraint.
    :rtype: bool
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    # uq_<table>_<column> -> "<table>.<column>" for SQLite messages
    parts = constraint_name.lower().split("_", 2)
    if len(parts) == 3 and parts[0] == "uq":
        return f"{parts[1]}.{parts[2]}" in message
    return False


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be raised from repositories or domain logic.
    - Anything not covered by a subclass surfaces as ``400``.
    """

    def __init__(self, message: str = "Service error") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when required input is missing or malformed (400)."""

    def __init__(self, message: str = "Invalid input", *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository (404).

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __post_init__(self) -> None:
        super().__init__(f"{self.entity} not found: {self.key}")


@dataclass(eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs (409).

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __post_init__(self) -> None:
        super().__init__(f"Conflict on {self.entity}: {self.detail}")


class UnauthorizedError(ServiceError):
    """Raised for bad credentials, bad tokens or refresh-token mismatch (401)."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


class TokenExpiredError(UnauthorizedError):
    """Raised by the token issuer when a token's ``exp`` has passed."""

    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class InvalidSignatureError(UnauthorizedError):
    """Raised by the token issuer for tampered, malformed or wrong-kind tokens."""

    def __init__(self, message: str = "Token is invalid") -> None:
        super().__init__(message)


class InternalError(ServiceError):
    """Raised when a collaborator (store, media host) fails unexpectedly (500)."""

    def __init__(self, message: str = "Something went wrong") -> None:
        super().__init__(message)
