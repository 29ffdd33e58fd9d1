"""Subscription repository: channel relationship counts and membership."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from vidhub.models.subscription import Subscription
from vidhub.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Persistence-only repository for :class:`Subscription`."""

    model = Subscription

    def _filterable_fields(self):
        return {
            "subscriber_id": Subscription.subscriber_id,
            "channel_id": Subscription.channel_id,
        }

    def count_subscribers(self, channel_id: int) -> int:
        """Number of users subscribed to ``channel_id``."""
        return self.count(channel_id=channel_id)

    def count_subscriptions(self, subscriber_id: int) -> int:
        """Number of channels ``subscriber_id`` is subscribed to."""
        return self.count(subscriber_id=subscriber_id)

    def get_pair(self, subscriber_id: int, channel_id: int) -> Subscription | None:
        stmt = select(Subscription).where(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        )
        return cast(Subscription | None, self.session.execute(stmt).scalars().first())

    def is_subscribed(self, subscriber_id: int | None, channel_id: int) -> bool:
        """Return ``True`` iff a ``(subscriber_id, channel_id)`` row exists.

        An anonymous viewer (``None``) is never subscribed.
        """
        if subscriber_id is None:
            return False
        return self.exists(subscriber_id=subscriber_id, channel_id=channel_id)
