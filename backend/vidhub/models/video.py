"""Video and watch-history models.

Videos are owned by another part of the platform; this service only reads
them as join targets for channel pages and watch history.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidhub.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin
from .user import User


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Uploaded video owned by a user."""

    __tablename__ = "videos"

    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    video_file_url: Mapped[str] = mapped_column(String(512), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    owner: Mapped[User] = relationship(User, lazy="joined")


class WatchHistoryEntry(db.Model):
    """
    One position in a user's ordered watch history.

    ``position`` is monotonically increasing per user; the history is read in
    ascending order. Entries disappear with their video (``ON DELETE CASCADE``).
    """

    __tablename__ = "watch_history"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    video_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "position", name="uq_watch_history_user_id_position"),
    )

    def __repr__(self) -> str:
        return f"<WatchHistoryEntry user={self.user_id} video={self.video_id} pos={self.position}>"
