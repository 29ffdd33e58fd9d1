"""Idempotent demo data for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidhub.models.subscription import Subscription
from vidhub.models.user import User
from vidhub.models.video import Video, WatchHistoryEntry

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEMO_AVATAR = "https://res.cloudinary.com/demo/image/upload/sample.jpg"

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "alexm",
        "email": "alex.martinez@example.com",
        "full_name": "Alex Martinez",
        "password": "devPass123!",
    },
    {
        "username": "jamielee",
        "email": "jamie.lee@example.com",
        "full_name": "Jamie Lee",
        "password": "strongPass123",
    },
    {
        "username": "sarak",
        "email": "sara.kim@example.com",
        "full_name": "Sara Kim",
        "password": "watchMore2024",
    },
]

# (owner username, title, duration in seconds)
VIDEO_FIXTURES: list[tuple[str, str, int]] = [
    ("alexm", "Intro to sourdough", 642),
    ("alexm", "Knife skills in ten minutes", 611),
    ("jamielee", "Bouldering basics", 905),
    ("sarak", "Tiny desk concert", 1320),
]

# (subscriber, channel)
SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("jamielee", "alexm"),
    ("sarak", "alexm"),
    ("alexm", "jamielee"),
]

# username -> titles in watch order
HISTORY_FIXTURES: dict[str, list[str]] = {
    "jamielee": ["Intro to sourdough", "Tiny desk concert"],
    "sarak": ["Bouldering basics", "Knife skills in ten minutes", "Intro to sourdough"],
}


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    counters = summary.setdefault(table, {"created": 0, "existing": 0})
    counters["created" if created else "existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    password = params.pop("password", None)
    instance = cast(T, model(**params))
    if password is not None:
        instance.set_password(password)  # type: ignore[attr-defined]
    session.add(instance)
    session.flush()
    return instance, True


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo users, videos, subscriptions and watch history, then commit."""
    session = cast(Session, database.session)
    summary: dict[str, dict[str, int]] = {}

    users: dict[str, User] = {}
    for fixture in USER_FIXTURES:
        defaults = {k: v for k, v in fixture.items() if k != "username"}
        defaults["avatar_url"] = DEMO_AVATAR
        user, created = _get_or_create(session, User, defaults=defaults, username=fixture["username"])
        users[fixture["username"]] = user
        _touch(summary, "users", created)

    videos: dict[str, Video] = {}
    for owner, title, duration in VIDEO_FIXTURES:
        video, created = _get_or_create(
            session,
            Video,
            defaults={
                "video_file_url": f"https://res.cloudinary.com/demo/video/upload/{title.replace(' ', '_')}.mp4",
                "duration_seconds": duration,
            },
            owner_id=users[owner].id,
            title=title,
        )
        videos[title] = video
        _touch(summary, "videos", created)

    for subscriber, channel in SUBSCRIPTION_FIXTURES:
        _, created = _get_or_create(
            session,
            Subscription,
            subscriber_id=users[subscriber].id,
            channel_id=users[channel].id,
        )
        _touch(summary, "subscriptions", created)

    for username, titles in HISTORY_FIXTURES.items():
        for position, title in enumerate(titles, start=1):
            _, created = _get_or_create(
                session,
                WatchHistoryEntry,
                defaults={"position": position},
                user_id=users[username].id,
                video_id=videos[title].id,
            )
            _touch(summary, "watch_history", created)

    session.commit()
    if verbose:
        LOGGER.info("Demo seed finished", extra={"status": "ok"})
    return summary


__all__ = ["run_all"]
