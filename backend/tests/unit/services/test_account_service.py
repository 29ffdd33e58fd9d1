# tests/unit/services/test_account_service.py
from __future__ import annotations

import os

import pytest

from tests.factories.user import UserFactory
from vidhub.models.user import User
from vidhub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from vidhub.services._shared.ports import StubMediaUploader
from vidhub.services.accounts import AccountService
from vidhub.services.accounts.dto import UpdateProfileIn


@pytest.fixture()
def service(uploader) -> AccountService:
    return AccountService(media_uploader=uploader)


@pytest.fixture()
def bob(session):
    user = UserFactory(username="bob", email="bob@example.com", full_name="Bob")
    session.commit()
    return user.id


def test_get_current_user(service, bob):
    out = service.get_current_user(bob)
    assert out.username == "bob"
    assert out.email == "bob@example.com"


def test_get_current_user_missing(service):
    with pytest.raises(NotFoundError):
        service.get_current_user(424242)


def test_update_full_name_only(service, bob):
    out = service.update_profile(UpdateProfileIn(user_id=bob, full_name="Robert"))
    assert out.full_name == "Robert"
    assert out.email == "bob@example.com"


def test_update_email_normalized(service, session, bob):
    out = service.update_profile(UpdateProfileIn(user_id=bob, email="  Robert@Example.com "))
    assert out.email == "robert@example.com"
    session.expire_all()
    assert session.get(User, bob).email == "robert@example.com"


def test_update_requires_a_field(service, bob):
    with pytest.raises(ValidationError, match="At least one"):
        service.update_profile(UpdateProfileIn(user_id=bob))


def test_update_rejects_blank(service, bob):
    with pytest.raises(ValidationError):
        service.update_profile(UpdateProfileIn(user_id=bob, full_name="  "))


def test_update_email_taken_by_other(service, session, bob):
    UserFactory(email="taken@example.com")
    session.commit()

    with pytest.raises(ConflictError, match="email already in use"):
        service.update_profile(UpdateProfileIn(user_id=bob, email="TAKEN@example.com"))


def test_update_own_email_to_same_value(service, bob):
    out = service.update_profile(UpdateProfileIn(user_id=bob, email="bob@example.com"))
    assert out.email == "bob@example.com"


def test_update_missing_user(service):
    with pytest.raises(NotFoundError):
        service.update_profile(UpdateProfileIn(user_id=999_999, full_name="x"))


def test_update_avatar(service, uploader, session, bob, staged_file):
    path = staged_file("new.png")

    out = service.update_avatar(bob, path)

    assert out.avatar_url == "https://media.test/new.png"
    assert uploader.calls == [path]
    assert not os.path.exists(path)
    session.expire_all()
    assert session.get(User, bob).avatar_url == "https://media.test/new.png"


def test_update_cover_image(service, bob, staged_file):
    out = service.update_cover_image(bob, staged_file("cover.jpg"))
    assert out.cover_image_url == "https://media.test/cover.jpg"


@pytest.mark.parametrize("method", ["update_avatar", "update_cover_image"])
def test_media_update_requires_file(service, uploader, bob, method):
    with pytest.raises(ValidationError):
        getattr(service, method)(bob, None)
    assert uploader.calls == []


def test_media_update_upload_failure_keeps_old_url(session, bob, staged_file):
    svc = AccountService(media_uploader=StubMediaUploader(fail=True))
    path = staged_file()

    with pytest.raises(InternalError):
        svc.update_avatar(bob, path)

    assert not os.path.exists(path)
    session.expire_all()
    assert session.get(User, bob).avatar_url == "https://media.test/bob.png"
