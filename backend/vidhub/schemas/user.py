"""User-facing Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserSchema(Schema):
    """Public user representation. Never includes password or refresh token."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    avatar_url = fields.String(required=True, data_key="avatarUrl")
    cover_image_url = fields.String(data_key="coverImageUrl")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)


class UpdateAccountSchema(Schema):
    """Partial account update; absent keys stay unchanged."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(load_default=None, data_key="fullName", validate=validate.Length(max=100))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
