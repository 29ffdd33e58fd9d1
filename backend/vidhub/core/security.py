"""Password hashing primitives."""

from __future__ import annotations

from flask import Flask
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_METHOD = "scrypt"


class PasswordHasher:
    """
    One-way, salted password hashing backed by :mod:`werkzeug.security`.

    The digest embeds method, salt and parameters, so changing ``method``
    only affects newly written hashes; older digests keep verifying.

    :param method: Werkzeug hashing method (``"scrypt"``, ``"pbkdf2:sha256:600000"``...).
    :type method: str
    :param salt_length: Salt length in characters.
    :type salt_length: int
    """

    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self.method = method
        self.salt_length = salt_length

    def hash(self, plaintext: str) -> str:
        """
        Hash ``plaintext``.

        :param plaintext: Raw password.
        :type plaintext: str
        :returns: Self-describing digest (``method$salt$hash``).
        :rtype: str
        :raises ValueError: If the password is empty or not a string.
        """
        if not isinstance(plaintext, str) or not plaintext:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """
        Check ``plaintext`` against ``digest`` using a constant-time comparison.

        :returns: ``True`` on match; ``False`` on mismatch or missing digest.
        :rtype: bool
        """
        if not digest or not isinstance(plaintext, str):
            return False
        return bool(check_password_hash(digest, plaintext))


# Process-wide hasher used by the ``User`` model; reconfigured by ``init_app``
password_hasher = PasswordHasher()


def init_app(app: Flask) -> None:
    """Apply ``PASSWORD_HASH_METHOD`` to the shared hasher."""
    password_hasher.method = app.config.get("PASSWORD_HASH_METHOD", DEFAULT_METHOD)
