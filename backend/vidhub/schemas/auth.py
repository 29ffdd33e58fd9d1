"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .user import UserSchema


class RegisterSchema(Schema):
    """Form fields for account registration (files travel separately)."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(required=True, data_key="fullName", validate=validate.Length(max=100))
    username = fields.String(required=True, validate=validate.Length(max=50))
    email = fields.String(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Credentials: either ``username`` or ``email`` plus ``password``."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None)
    email = fields.String(load_default=None)
    password = fields.String(required=True)


class ChangePasswordSchema(Schema):
    old_password = fields.String(required=True, data_key="oldPassword")
    new_password = fields.String(required=True, data_key="newPassword", validate=validate.Length(max=128))


class RefreshTokenSchema(Schema):
    """Optional body carrying the refresh token when no cookie is sent."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(load_default=None, data_key="refreshToken")


class TokenPairSchema(Schema):
    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class LoginResponseSchema(TokenPairSchema):
    """Login payload: the sanitized user plus both tokens."""

    user = fields.Nested(UserSchema, required=True)
