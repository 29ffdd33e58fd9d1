# vidhub/services/accounts/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidhub.services._shared.base import BaseService
from vidhub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
    violates,
)
from vidhub.services._shared.ports.media_uploader import MediaUploader
from vidhub.services.accounts.dto import UpdateProfileIn, UserPublicOut, to_user_public

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """Read and edit the authenticated user's own account."""

    def __init__(self, *, media_uploader: MediaUploader) -> None:
        super().__init__()
        self.media = media_uploader

    def get_current_user(self, user_id: int) -> UserPublicOut:
        """
        :raises NotFoundError: If the user no longer exists.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_user_public(user)

    def update_profile(self, dto: UpdateProfileIn) -> UserPublicOut:
        """
        Apply a partial update of ``full_name`` and/or ``email``.

        :raises ValidationError: No field supplied, or a supplied field is blank.
        :raises ConflictError: Email already used by another account.
        :raises NotFoundError: User vanished.
        """
        updates: dict[str, str] = {}
        if dto.full_name is not None:
            updates["full_name"] = dto.full_name
        if dto.email is not None:
            updates["email"] = dto.email
        if not updates:
            raise ValidationError("At least one of fullName or email is required")
        for key, value in updates.items():
            if not value.strip():
                raise ValidationError("Fields cannot be blank", field=key)

        try:
            with self.rw_uow() as uow:
                user = uow.users.get(dto.user_id)
                if user is None:
                    raise NotFoundError("User", dto.user_id)
                if "email" in updates and uow.users.email_taken_by_other(updates["email"], user.id):
                    raise ConflictError("User", "email already in use")
                uow.users.assign_updates(user, updates)
                out = to_user_public(user)
        except IntegrityError as exc:
            if violates(exc, "uq_users_email"):
                raise ConflictError("User", "email already in use") from exc
            raise
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        logger.info("Profile updated", extra={"user_id": dto.user_id})
        return out

    def update_avatar(self, user_id: int, local_path: str | None) -> UserPublicOut:
        """
        Upload a new avatar and store its URL.

        :raises ValidationError: No file supplied.
        :raises InternalError: Upload failed.
        :raises NotFoundError: User vanished.
        """
        return self._replace_media(
            user_id,
            local_path,
            field="avatar_url",
            missing="Avatar file is missing",
            failed="Error while uploading avatar",
        )

    def update_cover_image(self, user_id: int, local_path: str | None) -> UserPublicOut:
        """Same as :meth:`update_avatar` for the cover image."""
        return self._replace_media(
            user_id,
            local_path,
            field="cover_image_url",
            missing="Cover image file is missing",
            failed="Error while uploading cover image",
        )

    def _replace_media(
        self,
        user_id: int,
        local_path: str | None,
        *,
        field: str,
        missing: str,
        failed: str,
    ) -> UserPublicOut:
        if not local_path:
            raise ValidationError(missing, field=field)

        # Upload outside the transaction; the host call can be slow.
        uploaded = self.media.upload(local_path)
        if uploaded is None:
            raise InternalError(failed)

        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.assign_updates(user, {field: uploaded.url})
            out = to_user_public(user)

        logger.info("Media updated", extra={"user_id": user_id})
        return out
