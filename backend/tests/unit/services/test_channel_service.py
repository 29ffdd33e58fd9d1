# tests/unit/services/test_channel_service.py
from __future__ import annotations

import pytest

from tests.factories.user import UserFactory
from tests.factories.video import SubscriptionFactory, VideoFactory
from vidhub.services._shared.errors import ConflictError, NotFoundError, ValidationError
from vidhub.services.channels import ChannelService


@pytest.fixture()
def service() -> ChannelService:
    return ChannelService()


@pytest.fixture()
def people(session):
    """A channel ``c`` followed by ``a`` and ``b``; ``c`` follows ``b``."""
    a = UserFactory(username="a")
    b = UserFactory(username="b")
    c = UserFactory(username="c", cover_image_url="")
    SubscriptionFactory(subscriber=a, channel=c)
    SubscriptionFactory(subscriber=b, channel=c)
    SubscriptionFactory(subscriber=c, channel=b)
    session.commit()
    return {"a": a.id, "b": b.id, "c": c.id}


# ---------------------------- Channel profile ----------------------------- #
def test_channel_profile_counts_for_subscriber(service, people):
    out = service.channel_profile("c", viewer_id=people["a"])

    assert out.id == people["c"]
    assert out.subscribers_count == 2
    assert out.subscribed_to_count == 1
    assert out.is_subscribed is True
    assert out.cover_image_url == ""


def test_channel_profile_for_non_subscriber_and_anonymous(service, people):
    assert service.channel_profile("a", viewer_id=people["c"]).is_subscribed is False
    anon = service.channel_profile("c")
    assert anon.is_subscribed is False
    assert anon.subscribers_count == 2


def test_channel_profile_username_case_insensitive(service, people):
    assert service.channel_profile("  C ").username == "c"


def test_channel_profile_unknown(service):
    with pytest.raises(NotFoundError):
        service.channel_profile("nobody")


def test_channel_profile_blank(service):
    with pytest.raises(ValidationError):
        service.channel_profile("   ")


# ------------------------------ Subscriptions ----------------------------- #
def test_subscribe_and_unsubscribe(service, people):
    out = service.subscribe(people["a"], people["b"])
    assert out.subscriber_id == people["a"]
    assert out.channel_id == people["b"]
    assert service.channel_profile("b", viewer_id=people["a"]).subscribers_count == 2

    service.unsubscribe(people["a"], people["b"])
    profile = service.channel_profile("b", viewer_id=people["a"])
    assert profile.subscribers_count == 1
    assert profile.is_subscribed is False


def test_subscribe_twice_conflicts(service, people):
    with pytest.raises(ConflictError):
        service.subscribe(people["a"], people["c"])


def test_subscribe_to_self_rejected(service, people):
    with pytest.raises(ValidationError):
        service.subscribe(people["a"], people["a"])


def test_subscribe_to_missing_channel(service, people):
    with pytest.raises(NotFoundError):
        service.subscribe(people["a"], 987_654)


def test_unsubscribe_missing(service, people):
    with pytest.raises(NotFoundError):
        service.unsubscribe(people["a"], people["b"])


# ------------------------------ Watch history ----------------------------- #
def test_watch_history_in_watch_order_with_owner(service, session):
    viewer = UserFactory()
    owner = UserFactory(username="maker", full_name="Maker")
    v1 = VideoFactory(owner=owner, title="first")
    v2 = VideoFactory(owner=owner, title="second")
    session.commit()
    viewer_id, v1_id, v2_id = viewer.id, v1.id, v2.id

    service.record_watch(viewer_id, v2_id)
    service.record_watch(viewer_id, v1_id)
    items = service.watch_history(viewer_id)

    assert [i.title for i in items] == ["second", "first"]
    assert items[0].owner.username == "maker"
    assert items[0].owner.full_name == "Maker"
    assert items[0].owner.avatar_url == "https://media.test/maker.png"

    # Re-watching moves the video to the end without duplicating it
    service.record_watch(viewer_id, v2_id)
    assert [i.id for i in service.watch_history(viewer_id)] == [v1_id, v2_id]


def test_watch_history_empty(service, session):
    user = UserFactory()
    session.commit()
    assert service.watch_history(user.id) == []


def test_watch_history_missing_user(service):
    with pytest.raises(NotFoundError):
        service.watch_history(123_456)


def test_record_watch_missing_video(service, session):
    user = UserFactory()
    session.commit()
    with pytest.raises(NotFoundError):
        service.record_watch(user.id, 555_555)
