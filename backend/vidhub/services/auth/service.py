# vidhub/services/auth/service.py
from __future__ import annotations

import hmac
import logging
from datetime import timedelta

from vidhub.repositories.user import UserRepository
from vidhub.services._shared.base import BaseService
from vidhub.services._shared.errors import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from vidhub.services._shared.ports.denylist_store import TokenDenylistStore
from vidhub.services._shared.ports.token_provider import TokenKind, TokenProvider
from vidhub.services.accounts.dto import to_user_public
from vidhub.services.auth.dto import (
    AuthTokenConfig,
    ChangePasswordIn,
    LoginIn,
    LoginOut,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)

logger = logging.getLogger(__name__)


def _same_token(presented: str, stored: str | None) -> bool:
    if not stored:
        return False
    return hmac.compare_digest(presented.encode(), stored.encode())


class AuthService(BaseService):
    """
    Session lifecycle: login, logout, refresh rotation and password change.

    Each user holds at most one active refresh token, stored on the user
    row. Login and rotation overwrite it, logout clears it, and refresh only
    accepts the exact stored value, so a rotated-away token is rejected
    even while its signature is still valid.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter issuing and verifying tokens.
        :param denylist_store: Denylist for access tokens (``jti`` based).
        :param token_cfg: Token lifetime configuration.
        """
        super().__init__()
        self.tokens = token_provider
        self.denylist = denylist_store
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Sanitized user and the new pair.
        :raises ValidationError: If neither username nor email is given.
        :raises NotFoundError: If no user matches.
        :raises UnauthorizedError: If the password does not verify.
        """
        username = (dto.username or "").strip() or None
        email = (dto.email or "").strip() or None
        if not username and not email:
            raise ValidationError("username or email is required", field="username")

        with self.ro_uow() as uow:
            user = uow.users.find_by_username_or_email(username=username, email=email)
            if user is None:
                raise NotFoundError("User", username or email)
            if not user.verify_password(dto.password or ""):
                logger.warning("Login rejected: bad credentials", extra={"user_id": user.id})
                raise UnauthorizedError("Invalid user credentials")
            user_id = user.id

        with self.rw_uow() as uow:
            locked = uow.users.get_for_update(user_id)
            if locked is None:
                raise NotFoundError("User", user_id)
            pair = self._issue_pair(user_id)
            uow.users.set_refresh_token(locked, pair.refresh_token)
            out = LoginOut(
                user=to_user_public(locked),
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            )

        logger.info("User logged in", extra={"user_id": user_id})
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Clear the stored refresh token and revoke the presented access token.

        Idempotent: logging out twice, or with no stored token, succeeds.
        """
        with self.rw_uow() as uow:
            uow.users.clear_refresh_token(dto.user_id)

        if dto.access_jti:
            expires_at = dto.access_expires_at or (
                self.now_utc() + timedelta(minutes=self.cfg.access_expires_minutes)
            )
            self.denylist.revoke_jti(jti=dto.access_jti, expires_at=expires_at)

        logger.info("User logged out", extra={"user_id": dto.user_id})

    # ------------------------------------------------------------------ #
    # Refresh with rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange the active refresh token for a new pair.

        The user row is read with a row lock, so of two concurrent requests
        presenting the same token exactly one succeeds; the other sees the
        rotated value and is rejected.

        :raises UnauthorizedError: Token absent or not the active one.
        :raises TokenExpiredError: Token expired.
        :raises InvalidSignatureError: Token tampered, malformed or of the wrong kind.
        :raises NotFoundError: Subject no longer exists.
        """
        presented = dto.refresh_token
        if not presented:
            raise UnauthorizedError("Unauthorized request")

        claims = self.tokens.verify(presented, TokenKind.REFRESH)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(claims.user_id)
            if user is None:
                raise NotFoundError("User", claims.user_id)
            if not _same_token(presented, user.refresh_token):
                logger.warning(
                    "Refresh rejected: token is not the active one",
                    extra={"user_id": claims.user_id},
                )
                raise UnauthorizedError("Refresh token is expired or used")
            pair = self._issue_pair(user.id)
            repo.set_refresh_token(user, pair.refresh_token)

        logger.info("Tokens refreshed", extra={"user_id": claims.user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Password
    # ------------------------------------------------------------------ #

    def change_password(self, dto: ChangePasswordIn) -> None:
        """
        Replace the password after verifying the old one.

        Sessions already issued stay valid.

        :raises ValidationError: New password blank.
        :raises NotFoundError: User vanished.
        :raises UnauthorizedError: Old password does not verify.
        """
        if not dto.new_password or not dto.new_password.strip():
            raise ValidationError("New password is required", field="newPassword")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id)
            if not user.verify_password(dto.old_password or ""):
                raise UnauthorizedError("Invalid old password")
            uow.users.update_password(user.id, dto.new_password)

        logger.info("Password changed", extra={"user_id": dto.user_id})

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _issue_pair(self, user_id: int) -> TokenPairOut:
        return TokenPairOut(
            access_token=self.tokens.issue_access_token(user_id),
            refresh_token=self.tokens.issue_refresh_token(user_id),
        )
