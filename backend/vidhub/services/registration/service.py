# vidhub/services/registration/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidhub.models.user import User
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.errors import (
    ConflictError,
    InternalError,
    ValidationError,
    violates,
)
from vidhub.services._shared.ports.media_uploader import MediaUploader
from vidhub.services.accounts.dto import UserPublicOut, to_user_public
from vidhub.services.registration.dto import RegisterIn

logger = logging.getLogger(__name__)

_DUPLICATE_DETAIL = "User with email or username already exists"


class UserRegistrationService(BaseService):
    """Create accounts, uploading avatar and cover image to the media host."""

    def __init__(self, *, media_uploader: MediaUploader) -> None:
        super().__init__()
        self.media = media_uploader

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Register a new user.

        Checks run in a fixed order: required fields, field format, uniqueness,
        avatar presence, avatar upload. Nothing is persisted unless all pass,
        and nothing is uploaded while a field is malformed.

        :param dto: Registration input.
        :returns: The created user without password or refresh token.
        :raises ValidationError: Blank field or missing avatar.
        :raises ConflictError: Username or email already taken.
        :raises InternalError: Avatar upload failed.
        """
        fields = {
            "fullName": dto.full_name,
            "username": dto.username,
            "email": dto.email,
            "password": dto.password,
        }
        for name, value in fields.items():
            if value is None or not str(value).strip():
                raise ValidationError("All fields are required", field=name)

        # Model validators run before any media leaves the process
        try:
            user = User(full_name=dto.full_name, username=dto.username, email=dto.email)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        with self.ro_uow() as uow:
            taken = uow.users.exists_by_username_or_email(dto.username, dto.email)
        if taken:
            raise ConflictError("User", _DUPLICATE_DETAIL)

        if not dto.avatar_path:
            raise ValidationError("Avatar file is required", field="avatar")

        avatar = self.media.upload(dto.avatar_path)
        if avatar is None:
            raise InternalError("Something went wrong while uploading Avatar")

        cover_url = ""
        if dto.cover_image_path:
            cover = self.media.upload(dto.cover_image_path)
            if cover is not None:
                cover_url = cover.url

        try:
            with self.rw_uow() as uow:
                user.avatar_url = avatar.url
                user.cover_image_url = cover_url
                user.set_password(dto.password)
                uow.users.add(user)
                out = to_user_public(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration
            if violates(exc, "uq_users_username") or violates(exc, "uq_users_email"):
                raise ConflictError("User", _DUPLICATE_DETAIL) from exc
            raise
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        logger.info("User registered", extra={"user_id": out.id})
        return out
