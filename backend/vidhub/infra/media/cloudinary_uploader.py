"""Cloudinary adapter for :class:`~vidhub.services._shared.ports.MediaUploader`."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader

from vidhub.services._shared.ports.media_uploader import MediaUploader, UploadedMedia

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CloudinarySettings:
    """Credentials and limits for the upload API."""

    cloud_name: str
    api_key: str
    api_secret: str
    timeout: int = 30

    def as_options(self) -> dict[str, Any]:
        """Per-call SDK options; the process-wide ``cloudinary.config()`` is never touched."""
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
        }


class CloudinaryMediaUploader(MediaUploader):
    """
    Upload staged files to Cloudinary through its SDK.

    Failures never raise: a missing path, an SDK or transport error, or a
    response without a URL all yield ``None``. The local file is removed
    after every attempt.
    """

    def __init__(self, settings: CloudinarySettings) -> None:
        self.settings = settings

    def upload(self, local_path: str | None) -> UploadedMedia | None:
        if not local_path:
            logger.error("Media upload skipped: no file path provided")
            return None
        if not os.path.isfile(local_path):
            logger.error("Media upload skipped: staged file does not exist")
            return None

        try:
            return self._send(local_path)
        finally:
            try:
                os.remove(local_path)
            except OSError:
                logger.warning("Could not remove staged upload %s", local_path)

    def _send(self, local_path: str) -> UploadedMedia | None:
        try:
            body = cloudinary.uploader.upload(
                local_path, resource_type="auto", **self.settings.as_options()
            )
        except (cloudinary.exceptions.Error, OSError):
            logger.error("Media upload failed", exc_info=True)
            return None

        url = body.get("secure_url") or body.get("url")
        if not url:
            logger.error("Media upload returned no URL")
            return None
        logger.info("Media uploaded")
        return UploadedMedia(url=url, public_id=str(body.get("public_id", "")))
