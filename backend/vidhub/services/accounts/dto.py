# vidhub/services/accounts/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from vidhub.models.user import User

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UpdateProfileIn:
    """
    Partial profile update. ``None`` means "leave unchanged".

    :param user_id: Account being edited.
    :type user_id: int
    :param full_name: New display name.
    :type full_name: str | None
    :param email: New email.
    :type email: str | None
    """

    user_id: int
    full_name: str | None = None
    email: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """User projection safe to return to clients (no password or token)."""

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


def to_user_public(user: User) -> UserPublicOut:
    """Map an ORM user to :class:`UserPublicOut`. Call inside the UoW scope."""
    return UserPublicOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        cover_image_url=user.cover_image_url or "",
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
