# vidhub/services/channels/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public channel page for a user, as seen by a (possibly anonymous) viewer.

    :ivar subscribers_count: Users subscribed to this channel.
    :ivar subscribed_to_count: Channels this user subscribes to.
    :ivar is_subscribed: Whether the viewer subscribes to this channel.
    """

    id: int
    full_name: str
    username: str
    email: str
    avatar_url: str
    cover_image_url: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool


@dataclass(frozen=True, slots=True)
class VideoOwnerOut:
    full_name: str
    username: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class WatchHistoryItemOut:
    """A watched video with its owner projection."""

    id: int
    title: str
    description: str
    video_file_url: str
    thumbnail_url: str
    duration_seconds: int
    views: int
    created_at: datetime | None
    owner: VideoOwnerOut


@dataclass(frozen=True, slots=True)
class SubscriptionOut:
    id: int
    subscriber_id: int
    channel_id: int
    created_at: datetime | None = None
