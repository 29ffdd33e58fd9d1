# tests/unit/services/test_ports.py
from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta

import pytest

from vidhub.services._shared.errors import InvalidSignatureError, TokenExpiredError
from vidhub.services._shared.ports import (
    InMemoryDenylistStore,
    StubMediaUploader,
    StubTokenProvider,
    TokenKind,
)


def test_stub_tokens_verify_by_kind():
    tp = StubTokenProvider()
    access = tp.issue_access_token(3)

    claims = tp.verify(access, TokenKind.ACCESS)
    assert claims.user_id == 3
    assert claims.kind is TokenKind.ACCESS
    with pytest.raises(InvalidSignatureError):
        tp.verify(access, TokenKind.REFRESH)
    with pytest.raises(InvalidSignatureError):
        tp.verify("refresh.3.forged", TokenKind.REFRESH)


def test_stub_tokens_expire():
    tp = StubTokenProvider(access_expires=timedelta(seconds=-1))
    with pytest.raises(TokenExpiredError):
        tp.verify(tp.issue_access_token(1), TokenKind.ACCESS)


def test_in_memory_denylist():
    store = InMemoryDenylistStore()
    store.revoke_jti(jti="a", expires_at=datetime.now(UTC) + timedelta(minutes=1))

    assert store.is_revoked("a")
    assert not store.is_revoked("b")


def test_stub_uploader_removes_file_on_success_and_failure(staged_file):
    ok, bad = StubMediaUploader(), StubMediaUploader(fail=True)
    first, second = staged_file("one.png"), staged_file("two.png")

    assert ok.upload(first).url == "https://media.test/one.png"
    assert bad.upload(second) is None
    assert not os.path.exists(first) and not os.path.exists(second)
    assert ok.upload(None) is None
