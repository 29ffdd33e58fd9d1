from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import Protocol


class TokenDenylistStore(Protocol):
    """
    Denylist of revoked **access tokens**, keyed by ``jti``.

    Entries only need to outlive the token they revoke. Methods are expected
    to be idempotent.
    """

    def is_revoked(self, jti: str) -> bool: ...
    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """Process-local denylist, used when no Redis is configured."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            expires_at = self._revoked.get(jti)
            if expires_at is None:
                return False
            if expires_at <= datetime.now(UTC):
                # Token is expired anyway; drop the entry
                del self._revoked[jti]
                return False
            return True

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._revoked[jti] = expires_at
