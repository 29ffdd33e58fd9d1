"""Unit tests for the PyJWT token provider."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from vidhub.infra.jwt import JWTTokenProvider
from vidhub.services._shared.errors import InvalidSignatureError, TokenExpiredError
from vidhub.services._shared.ports import TokenKind


@pytest.fixture()
def provider() -> JWTTokenProvider:
    return JWTTokenProvider(access_secret="access-s3cret", refresh_secret="refresh-s3cret")


def test_access_token_round_trip(provider):
    token = provider.issue_access_token(42)
    claims = provider.verify(token, TokenKind.ACCESS)

    assert claims.user_id == 42
    assert claims.kind is TokenKind.ACCESS
    assert claims.jti
    assert claims.expires_at > datetime.now(UTC)


def test_access_token_carries_request_auth_claims(provider):
    payload = jwt.decode(provider.issue_access_token(7), "access-s3cret", algorithms=["HS256"])
    assert payload["sub"] == "7"
    assert payload["type"] == "access"
    assert payload["fresh"] is False
    assert {"jti", "iat", "nbf", "exp"} <= payload.keys()


def test_lifetimes_follow_configuration():
    p = JWTTokenProvider(
        access_secret="a",
        refresh_secret="r",
        access_expires=timedelta(minutes=15),
        refresh_expires=timedelta(days=10),
    )
    access = p.verify(p.issue_access_token(1), TokenKind.ACCESS)
    refresh = p.verify(p.issue_refresh_token(1), TokenKind.REFRESH)
    now = datetime.now(UTC)

    assert timedelta(minutes=14) < access.expires_at - now <= timedelta(minutes=15)
    assert timedelta(days=9, hours=23) < refresh.expires_at - now <= timedelta(days=10)


def test_each_token_is_unique(provider):
    assert provider.issue_refresh_token(1) != provider.issue_refresh_token(1)


def test_kinds_are_not_interchangeable(provider):
    with pytest.raises(InvalidSignatureError):
        provider.verify(provider.issue_access_token(1), TokenKind.REFRESH)
    with pytest.raises(InvalidSignatureError):
        provider.verify(provider.issue_refresh_token(1), TokenKind.ACCESS)


def test_expired_token_rejected():
    p = JWTTokenProvider(access_secret="a", refresh_secret="r", refresh_expires=timedelta(seconds=-1))
    with pytest.raises(TokenExpiredError):
        p.verify(p.issue_refresh_token(1), TokenKind.REFRESH)


def test_tampered_token_rejected(provider):
    token = provider.issue_refresh_token(1)
    head, body, sig = token.split(".")
    forged = ".".join([head, body, sig[:-2] + ("AA" if sig[-2:] != "AA" else "BB")])
    with pytest.raises(InvalidSignatureError):
        provider.verify(forged, TokenKind.REFRESH)


def test_garbage_rejected(provider):
    with pytest.raises(InvalidSignatureError):
        provider.verify("not-a-token", TokenKind.ACCESS)


def test_non_numeric_subject_rejected(provider):
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": "abc", "type": "refresh", "jti": "x", "exp": now + timedelta(minutes=1)},
        "refresh-s3cret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidSignatureError):
        provider.verify(token, TokenKind.REFRESH)


def test_equal_secrets_refused():
    with pytest.raises(ValueError):
        JWTTokenProvider(access_secret="same", refresh_secret="same")
