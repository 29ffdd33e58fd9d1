# vidhub/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidhub.services.accounts.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    Each identifier is matched only against its own column, so a username
    that looks like an email never shadows another user's address.

    :param password: Raw password (to be verified).
    :type password: str
    :param username: Username (any casing), when the client sent one.
    :type username: str | None
    :param email: Email (any casing), when the client sent one.
    :type email: str | None
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh token, ``None`` when the client sent none.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param user_id: Authenticated user.
    :type user_id: int
    :param access_jti: ``jti`` of the access token used for the request; when
        present it is denylisted until ``access_expires_at``.
    :type access_jti: str | None
    :param access_expires_at: Expiry of that access token.
    :type access_expires_at: datetime | None
    """

    user_id: int
    access_jti: str | None = None
    access_expires_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    user_id: int
    old_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Authenticated user plus the freshly issued pair."""

    user: UserPublicOut
    access_token: str
    refresh_token: str


# ------------------------ Config DTO --------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Fallback lifetime for denylist entries when the caller does not know the
    access token's expiry.

    :param access_expires_minutes: Access token lifetime in minutes.
    :type access_expires_minutes: int
    """

    access_expires_minutes: int = 15
