"""Token issuer port and a deterministic in-process implementation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from vidhub.services._shared.errors import InvalidSignatureError, TokenExpiredError


class TokenKind(str, enum.Enum):
    """Kind of a signed token; each kind has its own secret and lifetime."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified contents of a token.

    :ivar user_id: Subject (user primary key).
    :ivar kind: Token kind.
    :ivar jti: Unique token identifier.
    :ivar expires_at: Absolute expiry (UTC).
    """

    user_id: int
    kind: TokenKind
    jti: str
    expires_at: datetime


class TokenProvider(Protocol):
    """Port for issuing and verifying signed, expiring tokens."""

    def issue_access_token(self, user_id: int) -> str: ...

    def issue_refresh_token(self, user_id: int) -> str: ...

    def verify(self, token: str, expected_kind: TokenKind) -> TokenClaims:
        """
        Verify signature, expiry and kind.

        :raises TokenExpiredError: When the token's ``exp`` has passed.
        :raises InvalidSignatureError: For tampered, malformed or wrong-kind tokens.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque strings remembered in a registry; ``verify`` honours
    expiry (against the real clock) and kind exactly like the JWT adapter.
    """

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=15),
        refresh_expires: timedelta = timedelta(days=10),
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._seq = 0
        self._issued: dict[str, TokenClaims] = {}

    def _mk(self, user_id: int, kind: TokenKind, ttl: timedelta) -> str:
        self._seq += 1
        jti = f"jti-{self._seq}"
        token = f"{kind.value}.{user_id}.{jti}"
        self._issued[token] = TokenClaims(
            user_id=int(user_id),
            kind=kind,
            jti=jti,
            expires_at=datetime.now(UTC) + ttl,
        )
        return token

    def issue_access_token(self, user_id: int) -> str:
        return self._mk(user_id, TokenKind.ACCESS, self.access_expires)

    def issue_refresh_token(self, user_id: int) -> str:
        return self._mk(user_id, TokenKind.REFRESH, self.refresh_expires)

    def verify(self, token: str, expected_kind: TokenKind) -> TokenClaims:
        claims = self._issued.get(token)
        if claims is None or claims.kind is not expected_kind:
            raise InvalidSignatureError()
        if claims.expires_at <= datetime.now(UTC):
            raise TokenExpiredError()
        return claims
