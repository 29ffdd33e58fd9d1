"""Unit tests for the Cloudinary media uploader (SDK call patched)."""

from __future__ import annotations

import os
from types import SimpleNamespace

import cloudinary.exceptions
import pytest

from vidhub.infra.media import CloudinaryMediaUploader, CloudinarySettings
from vidhub.infra.media import cloudinary_uploader as module


@pytest.fixture()
def uploader() -> CloudinaryMediaUploader:
    return CloudinaryMediaUploader(
        CloudinarySettings(cloud_name="demo", api_key="key", api_secret="secret", timeout=5)
    )


@pytest.fixture()
def sdk_calls(monkeypatch):
    """Record SDK upload calls; ``reply`` sets what the fake returns or raises."""

    calls: list[tuple[str, dict]] = []
    state: dict = {"reply": {"secure_url": "https://res.cloudinary.com/demo/a.png", "public_id": "a"}}

    def fake_upload(file, **options):
        calls.append((file, options))
        reply = state["reply"]
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(module.cloudinary.uploader, "upload", fake_upload)
    return SimpleNamespace(calls=calls, state=state)


def test_upload_success_returns_url_and_removes_file(uploader, staged_file, sdk_calls):
    path = staged_file()

    result = uploader.upload(path)

    assert result is not None
    assert result.url == "https://res.cloudinary.com/demo/a.png"
    assert result.public_id == "a"
    assert not os.path.exists(path)


def test_upload_passes_instance_credentials_per_call(uploader, staged_file, sdk_calls):
    path = staged_file()

    uploader.upload(path)

    (file, options), = sdk_calls.calls
    assert file == path
    assert options["resource_type"] == "auto"
    assert options["cloud_name"] == "demo"
    assert options["api_key"] == "key"
    assert options["api_secret"] == "secret"
    assert options["timeout"] == 5


def test_upload_sdk_error_returns_none_and_removes_file(uploader, staged_file, sdk_calls):
    sdk_calls.state["reply"] = cloudinary.exceptions.Error("Invalid image file")
    path = staged_file()

    assert uploader.upload(path) is None
    assert not os.path.exists(path)


def test_upload_without_url_in_response(uploader, staged_file, sdk_calls):
    sdk_calls.state["reply"] = {"public_id": "a"}
    path = staged_file()

    assert uploader.upload(path) is None
    assert not os.path.exists(path)


def test_plain_url_used_when_secure_url_missing(uploader, staged_file, sdk_calls):
    sdk_calls.state["reply"] = {"url": "http://res.cloudinary.com/demo/b.png", "public_id": "b"}

    result = uploader.upload(staged_file())

    assert result.url == "http://res.cloudinary.com/demo/b.png"


@pytest.mark.parametrize("path", [None, "", "/definitely/not/here.png"])
def test_missing_path_returns_none_without_sdk_call(uploader, path, sdk_calls):
    assert uploader.upload(path) is None
    assert sdk_calls.calls == []
