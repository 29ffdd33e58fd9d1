"""Subscription relationship between two users."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    ``subscriber`` follows ``channel``.

    Both sides are users. The pair is unique so counts cannot be inflated by
    repeated subscribe calls, and a user cannot subscribe to themselves.
    """

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    subscriber: Mapped[User] = relationship(User, foreign_keys=[subscriber_id])
    channel: Mapped[User] = relationship(User, foreign_keys=[channel_id])

    __table_args__ = (
        UniqueConstraint(
            "subscriber_id",
            "channel_id",
            name="uq_subscriptions_subscriber_id_channel_id",
        ),
        CheckConstraint("subscriber_id <> channel_id", name="no_self_subscription"),
    )
