# vidhub/services/channels/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidhub.models.subscription import Subscription
from vidhub.models.video import Video
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.errors import ConflictError, NotFoundError, ValidationError
from vidhub.services.channels.dto import (
    ChannelProfileOut,
    SubscriptionOut,
    VideoOwnerOut,
    WatchHistoryItemOut,
)

logger = logging.getLogger(__name__)


def _to_history_item(video: Video) -> WatchHistoryItemOut:
    owner = video.owner
    return WatchHistoryItemOut(
        id=video.id,
        title=video.title,
        description=video.description,
        video_file_url=video.video_file_url,
        thumbnail_url=video.thumbnail_url,
        duration_seconds=video.duration_seconds,
        views=video.views,
        created_at=video.created_at,
        owner=VideoOwnerOut(
            full_name=owner.full_name,
            username=owner.username,
            avatar_url=owner.avatar_url,
        ),
    )


class ChannelService(BaseService):
    """Subscriptions and watch history aggregated around a user."""

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def channel_profile(self, username: str, viewer_id: int | None = None) -> ChannelProfileOut:
        """
        Build the channel page for ``username``.

        :param username: Channel handle (case-insensitive).
        :param viewer_id: Authenticated viewer, ``None`` when anonymous.
        :raises ValidationError: Username blank.
        :raises NotFoundError: No such channel.
        """
        if not username or not username.strip():
            raise ValidationError("username is missing", field="username")

        with self.ro_uow() as uow:
            channel = uow.users.get_by_username(username)
            if channel is None:
                raise NotFoundError("Channel", username.strip().lower())
            return ChannelProfileOut(
                id=channel.id,
                full_name=channel.full_name,
                username=channel.username,
                email=channel.email,
                avatar_url=channel.avatar_url,
                cover_image_url=channel.cover_image_url or "",
                subscribers_count=uow.subscriptions.count_subscribers(channel.id),
                subscribed_to_count=uow.subscriptions.count_subscriptions(channel.id),
                is_subscribed=uow.subscriptions.is_subscribed(viewer_id, channel.id),
            )

    def watch_history(self, user_id: int) -> list[WatchHistoryItemOut]:
        """
        Return ``user_id``'s watch history, oldest first.

        :raises NotFoundError: User vanished.
        """
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id)
            return [_to_history_item(v) for v in uow.videos.watch_history(user_id)]

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def subscribe(self, subscriber_id: int, channel_id: int) -> SubscriptionOut:
        """
        Subscribe ``subscriber_id`` to ``channel_id``.

        :raises ValidationError: Subscribing to oneself.
        :raises NotFoundError: Channel does not exist.
        :raises ConflictError: Already subscribed.
        """
        if subscriber_id == channel_id:
            raise ValidationError("Cannot subscribe to your own channel", field="channelId")

        try:
            with self.rw_uow() as uow:
                if uow.users.get(channel_id) is None:
                    raise NotFoundError("Channel", channel_id)
                if uow.subscriptions.get_pair(subscriber_id, channel_id) is not None:
                    raise ConflictError("Subscription", "already subscribed")
                sub = uow.subscriptions.add(
                    Subscription(subscriber_id=subscriber_id, channel_id=channel_id)
                )
                out = SubscriptionOut(
                    id=sub.id,
                    subscriber_id=sub.subscriber_id,
                    channel_id=sub.channel_id,
                    created_at=sub.created_at,
                )
        except IntegrityError as exc:
            raise ConflictError("Subscription", "already subscribed") from exc

        logger.info("Subscribed", extra={"user_id": subscriber_id})
        return out

    def unsubscribe(self, subscriber_id: int, channel_id: int) -> None:
        """
        :raises NotFoundError: No such subscription.
        """
        with self.rw_uow() as uow:
            sub = uow.subscriptions.get_pair(subscriber_id, channel_id)
            if sub is None:
                raise NotFoundError("Subscription", channel_id)
            uow.subscriptions.delete(sub)

        logger.info("Unsubscribed", extra={"user_id": subscriber_id})

    def record_watch(self, user_id: int, video_id: int) -> None:
        """
        Append ``video_id`` to the user's history, moving it to the end if
        already present.

        :raises NotFoundError: Video does not exist.
        """
        with self.rw_uow() as uow:
            if uow.videos.get(video_id) is None:
                raise NotFoundError("Video", video_id)
            uow.videos.append_to_watch_history(user_id, video_id)
