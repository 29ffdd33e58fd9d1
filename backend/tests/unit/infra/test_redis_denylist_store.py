"""Unit tests for RedisTokenDenylistStore using fakeredis."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest

from vidhub.infra.redis import RedisTokenDenylistStore


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    try:
        yield r
    finally:
        r.flushall()


@pytest.fixture
def store(fake_redis) -> RedisTokenDenylistStore:
    return RedisTokenDenylistStore(fake_redis)


def test_unknown_jti_not_revoked(store):
    assert store.is_revoked("nope") is False


def test_revoke_sets_ttl_to_remaining_lifetime(store, fake_redis):
    store.revoke_jti(jti="abc", expires_at=datetime.now(UTC) + timedelta(minutes=10))

    assert store.is_revoked("abc") is True
    ttl = fake_redis.ttl("deny:at:abc")
    assert 590 <= ttl <= 600


def test_revoke_past_expiry_uses_minimal_ttl(store, fake_redis):
    store.revoke_jti(jti="old", expires_at=datetime.now(UTC) - timedelta(minutes=1))
    assert fake_redis.ttl("deny:at:old") == 1


def test_revoke_is_idempotent(store):
    exp = datetime.now(UTC) + timedelta(minutes=5)
    store.revoke_jti(jti="dup", expires_at=exp)
    store.revoke_jti(jti="dup", expires_at=exp)
    assert store.is_revoked("dup")
