"""Factories for videos, watch history and subscriptions."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from tests.factories.user import UserFactory
from vidhub.models.subscription import Subscription
from vidhub.models.video import Video, WatchHistoryEntry


class VideoFactory(BaseFactory):
    class Meta:
        model = Video

    id = None
    owner = factory.SubFactory(UserFactory)
    title = factory.Sequence(lambda n: f"Video {n}")
    description = factory.Faker("sentence")
    video_file_url = factory.Sequence(lambda n: f"https://media.test/video{n}.mp4")
    thumbnail_url = factory.Sequence(lambda n: f"https://media.test/thumb{n}.jpg")
    duration_seconds = 120


class WatchHistoryEntryFactory(BaseFactory):
    class Meta:
        model = WatchHistoryEntry

    user_id = None
    video_id = None
    position = factory.Sequence(lambda n: n + 1)


class SubscriptionFactory(BaseFactory):
    class Meta:
        model = Subscription

    id = None
    subscriber = factory.SubFactory(UserFactory)
    channel = factory.SubFactory(UserFactory)
