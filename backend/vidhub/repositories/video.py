"""Video repository: watch-history reads and writes."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import contains_eager

from vidhub.models.user import User
from vidhub.models.video import Video, WatchHistoryEntry
from vidhub.repositories.base import BaseRepository


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video` and watch history."""

    model = Video

    def _filterable_fields(self):
        return {"id": Video.id, "owner_id": Video.owner_id}

    def watch_history(self, user_id: int) -> list[Video]:
        """
        Return the videos in ``user_id``'s history, oldest first.

        One query joins history, videos and owners. The inner join drops
        entries whose video no longer exists.

        :param user_id: History owner.
        :type user_id: int
        :returns: Videos with ``owner`` populated.
        :rtype: list[Video]
        """
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .join(User, User.id == Video.owner_id)
            .options(contains_eager(Video.owner))
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.position.asc())
        )
        return list(self.session.execute(stmt).unique().scalars().all())

    def append_to_watch_history(self, user_id: int, video_id: int) -> WatchHistoryEntry:
        """
        Record ``video_id`` as the most recent entry of ``user_id``'s history.

        A video already present is moved to the end rather than duplicated.
        """
        last = self.session.execute(
            select(func.max(WatchHistoryEntry.position)).where(WatchHistoryEntry.user_id == user_id)
        ).scalar_one_or_none()
        position = (last or 0) + 1

        entry = self.session.get(WatchHistoryEntry, (user_id, video_id))
        if entry is None:
            entry = WatchHistoryEntry(user_id=user_id, video_id=video_id, position=position)
            self.session.add(entry)
        else:
            if entry.position != last:
                entry.position = position
            entry.watched_at = func.now()
        self.flush()
        return entry
