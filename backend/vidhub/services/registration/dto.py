# vidhub/services/registration/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for account registration.

    :param full_name: Display name.
    :param username: Desired handle (normalized on persist).
    :param email: Login email (normalized on persist).
    :param password: Raw password; hashed before storage.
    :param avatar_path: Locally staged avatar file (mandatory).
    :param cover_image_path: Locally staged cover image (optional).
    """

    full_name: str
    username: str
    email: str
    password: str
    avatar_path: str | None = None
    cover_image_path: str | None = None
