"""Marshmallow schemas for request validation and response serialization."""

from __future__ import annotations

from .auth import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .channel import (
    ChannelProfileSchema,
    SubscriptionSchema,
    VideoOwnerSchema,
    WatchHistoryItemSchema,
)
from .user import UpdateAccountSchema, UserSchema

__all__ = [
    "ChangePasswordSchema",
    "ChannelProfileSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "SubscriptionSchema",
    "TokenPairSchema",
    "UpdateAccountSchema",
    "UserSchema",
    "VideoOwnerSchema",
    "WatchHistoryItemSchema",
]
