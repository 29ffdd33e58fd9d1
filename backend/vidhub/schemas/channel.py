"""Channel and watch-history Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ChannelProfileSchema(Schema):
    id = fields.Integer(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    username = fields.String(required=True)
    email = fields.String(required=True)
    avatar_url = fields.String(required=True, data_key="avatarUrl")
    cover_image_url = fields.String(data_key="coverImageUrl")
    subscribers_count = fields.Integer(required=True, data_key="subscribersCount")
    subscribed_to_count = fields.Integer(required=True, data_key="subscribedToCount")
    is_subscribed = fields.Boolean(required=True, data_key="isSubscribed")


class VideoOwnerSchema(Schema):
    full_name = fields.String(data_key="fullName")
    username = fields.String()
    avatar_url = fields.String(data_key="avatarUrl")


class WatchHistoryItemSchema(Schema):
    """A watched video with its owner."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    description = fields.String()
    video_file_url = fields.String(data_key="videoFile")
    thumbnail_url = fields.String(data_key="thumbnail")
    duration_seconds = fields.Integer(data_key="duration")
    views = fields.Integer()
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    owner = fields.Nested(VideoOwnerSchema)


class SubscriptionSchema(Schema):
    id = fields.Integer(required=True)
    subscriber_id = fields.Integer(data_key="subscriberId")
    channel_id = fields.Integer(data_key="channelId")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
