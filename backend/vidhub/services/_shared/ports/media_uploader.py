"""Media host port."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UploadedMedia:
    """Result of a successful upload."""

    url: str
    public_id: str


class MediaUploader(Protocol):
    """
    Uploads a locally staged file to the media host.

    Implementations return ``None`` instead of raising when the path is
    missing or the upload fails, and remove the local file once the attempt
    finishes, whatever its outcome.
    """

    def upload(self, local_path: str | None) -> UploadedMedia | None: ...


class StubMediaUploader(MediaUploader):
    """In-process uploader for tests.

    Records every attempted path, honours the cleanup contract and can be
    told to fail.
    """

    def __init__(self, *, fail: bool = False, base_url: str = "https://media.test") -> None:
        self.fail = fail
        self.base_url = base_url
        self.calls: list[str | None] = []

    def upload(self, local_path: str | None) -> UploadedMedia | None:
        self.calls.append(local_path)
        if not local_path:
            return None
        try:
            if self.fail:
                return None
            name = os.path.basename(local_path)
            return UploadedMedia(url=f"{self.base_url}/{name}", public_id=name)
        finally:
            if os.path.exists(local_path):
                os.remove(local_path)
