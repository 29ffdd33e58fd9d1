"""User repository: the credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from vidhub.models.user import User
from vidhub.repositories.base import BaseRepository


def _normalize(value: str) -> str:
    return value.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Handles lookups, password writes and the stored refresh token. It never
    issues tokens itself.
    """

    model = User

    def _filterable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
        }

    def _updatable_fields(self):
        """Publicly updatable profile fields (never password or token)."""
        return {"full_name", "email", "avatar_url", "cover_image_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by username (case-insensitive)."""
        stmt = select(User).where(User.username == _normalize(username))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """
        Fetch the user matching ``username`` on the username column or
        ``email`` on the email column (case-insensitive).

        Values are never compared across columns.

        :param username: Username, any casing.
        :type username: str | None
        :param email: Email, any casing.
        :type email: str | None
        :returns: Matching user or ``None`` (also when both are blank).
        :rtype: User | None
        """
        clauses = []
        if username:
            clauses.append(User.username == _normalize(username))
        if email:
            clauses.append(User.email == _normalize(email))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Return ``True`` if either the username or the email is already taken."""
        stmt = select(User.id).where(
            or_(User.username == _normalize(username), User.email == _normalize(email))
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def email_taken_by_other(self, email: str, user_id: int) -> bool:
        """Return ``True`` if ``email`` belongs to a user other than ``user_id``."""
        stmt = select(User.id).where(User.email == _normalize(email), User.id != user_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Password ops ----------------------------

    def update_password(self, user_id: int, new_password: str) -> None:
        """Hash and store a new password.

        :raises ValueError: If the user does not exist.
        """
        user = self.get(user_id)
        if not user:
            raise ValueError(f"User {user_id} not found.")
        user.set_password(new_password)
        self.flush()

    # ---------------------------- Refresh token ----------------------------

    def set_refresh_token(self, user: User, token: str | None) -> None:
        """Replace the stored refresh token; any previous token stops validating."""
        user.refresh_token = token
        self.flush()

    def clear_refresh_token(self, user_id: int) -> int:
        """
        Clear the stored refresh token with a single UPDATE.

        Idempotent: clearing an already-empty token, or a missing user, is not
        an error.

        :returns: Number of rows touched (``0`` or ``1``).
        :rtype: int
        """
        result = self.session.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=None)
            .execution_options(synchronize_session="fetch")
        )
        return int(result.rowcount or 0)
