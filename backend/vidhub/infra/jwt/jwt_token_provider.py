# vidhub/infra/jwt/jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from vidhub.services._shared.errors import InvalidSignatureError, TokenExpiredError
from vidhub.services._shared.ports.token_provider import TokenClaims, TokenKind, TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    PyJWT adapter signing each token kind with its own secret.

    Access tokens carry the claim set flask-jwt-extended expects (``sub`` as
    a string, ``type``, ``fresh``, ``jti``, ``iat``, ``nbf``, ``exp``), so
    request authentication verifies them with ``JWT_SECRET_KEY`` set to the
    access secret. Refresh tokens are only ever verified here.

    :raises ValueError: If both secrets are empty or equal.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=10)
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Token secrets must be configured.")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh token secrets must differ.")

    def _secret_for(self, kind: TokenKind) -> str:
        return self.access_secret if kind is TokenKind.ACCESS else self.refresh_secret

    def _encode(self, user_id: int, kind: TokenKind, ttl: timedelta, **extra: Any) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "type": kind.value,
            "jti": str(uuid4()),
            "iat": now,
            "nbf": now,
            "exp": now + ttl,
        }
        payload.update(extra)
        return jwt.encode(payload, self._secret_for(kind), algorithm=self.algorithm)

    def issue_access_token(self, user_id: int) -> str:
        return self._encode(user_id, TokenKind.ACCESS, self.access_expires, fresh=False)

    def issue_refresh_token(self, user_id: int) -> str:
        return self._encode(user_id, TokenKind.REFRESH, self.refresh_expires)

    def verify(self, token: str, expected_kind: TokenKind) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret_for(expected_kind),
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub", "jti"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidSignatureError() from exc

        if payload.get("type") != expected_kind.value:
            raise InvalidSignatureError("Wrong token type")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidSignatureError("Token subject is invalid") from exc

        return TokenClaims(
            user_id=user_id,
            kind=expected_kind,
            jti=str(payload["jti"]),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )
