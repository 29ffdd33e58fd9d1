from __future__ import annotations

from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]


class RedisTokenDenylistStore:
    """
    Access-token denylist in Redis.

    Each revoked ``jti`` is a marker key whose TTL matches the remaining
    lifetime of its token, so entries expire on their own.
    """

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(jti: str) -> str:
        return f"deny:at:{jti}"

    def is_revoked(self, jti: str) -> bool:
        return cast(int, self.r.exists(self._k(jti))) == 1

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        now = datetime.now(UTC).timestamp()
        ttl = max(1, int(expires_at.timestamp() - now))
        self.r.set(self._k(jti), "1", ex=ttl)
