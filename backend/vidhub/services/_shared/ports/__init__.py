"""
vidhub.services._shared.ports
=============================

Ports (hexagonal interfaces) the service layer depends on. Concrete
adapters live under :mod:`vidhub.infra`.

- :mod:`token_provider`: :class:`TokenProvider`, issuing and verifying tokens.
- :mod:`media_uploader`: :class:`MediaUploader`, the external media host.
- :mod:`denylist_store`: :class:`TokenDenylistStore`, revoked access tokens.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .media_uploader import MediaUploader, StubMediaUploader, UploadedMedia
from .token_provider import StubTokenProvider, TokenClaims, TokenKind, TokenProvider

__all__ = [
    "InMemoryDenylistStore",
    "MediaUploader",
    "StubMediaUploader",
    "StubTokenProvider",
    "TokenClaims",
    "TokenDenylistStore",
    "TokenKind",
    "TokenProvider",
    "UploadedMedia",
]
