"""User model: identity, credentials, media and the active refresh token."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from vidhub.core.extensions import db
from vidhub.core.security import password_hasher

from .base import PKMixin, ReprMixin, TimestampMixin


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account, also addressable as a *channel*.

    Fields
    ------
    username : str
        Public handle. Stored trimmed and lowercased; unique.
    email : str
        Login email. Stored trimmed and lowercased; unique.
    full_name : str
        Display name.
    password_hash : str
        Salted hash; written only through :meth:`set_password`.
    avatar_url : str
        Media-host URL of the avatar (mandatory).
    cover_image_url : str
        Media-host URL of the cover image, ``""`` when absent.
    refresh_token : str | None
        The single refresh token currently accepted for this user. ``None``
        means the user must log in again.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(512), nullable=False)
    cover_image_url: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        self.set_password(raw)

    def set_password(self, raw: str) -> None:
        """
        Hash ``raw`` and store the digest.

        The input is always treated as plaintext; there is no "already
        hashed" detection.

        :param raw: Plain text password.
        :type raw: str
        :raises ValueError: If ``raw`` is empty.
        """
        self.password_hash = password_hasher.hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        return password_hasher.verify(raw, self.password_hash)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and lowercase the username.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip().lower()

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return value.strip()

    @validates("avatar_url")
    def _require_avatar(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Avatar URL is required.")
        return value
