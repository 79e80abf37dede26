# tokenauth/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NoReturn

from tokenauth.services._shared.base import BaseService
from tokenauth.services._shared.errors import (
    CredentialError,
    InvalidInputError,
    TokenError,
)
from tokenauth.services._shared.ports import (
    CredentialValidator,
    SessionStore,
    SessionStoreStats,
    TokenProvider,
)
from tokenauth.services.auth.dto import (
    AuthTokenConfig,
    CurrentUserOut,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Session lifecycle service (login / refresh / logout).

    Tokens are issued and verified through a pluggable TokenProvider; refresh
    tokens are tracked in a SessionStore so they can be revoked. Refresh does
    not rotate: the same refresh token stays valid until logout or expiry.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        session_store: SessionStore,
        credentials: CredentialValidator,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing/verifying JWTs.
        :param session_store: Store tracking outstanding refresh tokens.
        :param credentials: Validator for submitted username/password pairs.
        :param token_cfg: Access/Refresh expiry configuration.
        """
        super().__init__()
        self.tokens = token_provider
        self.sessions = session_store
        self.credentials = credentials
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Access/Refresh token pair.
        :raises CredentialError: If credentials are invalid, whatever the field.
        """
        if not self.credentials.validate(dto.username, dto.password):
            log.warning("auth.login.rejected")
            raise CredentialError()

        access = self.tokens.issue_access_token(
            dto.username, expires_delta=self.cfg.access_expires
        )
        refresh = self.tokens.issue_refresh_token(
            dto.username, expires_delta=self.cfg.refresh_expires
        )
        self.sessions.save(refresh, dto.username, self.cfg.refresh_expires)

        log.info("auth.login.succeeded", extra={"subject": dto.username})
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Refresh (no rotation)
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange a tracked refresh token for a new access token.

        :raises InvalidInputError: If no refresh token was supplied.
        :raises TokenError: If the token is unknown, expired, revoked or fails
            signature verification.
        """
        token = self._require_token(dto.refresh_token)

        owner = self.sessions.verify(token)
        if owner is None:
            self._reject_refresh("not found in session store")

        try:
            claims = self.tokens.verify_refresh_token(token)
        except TokenError as exc:
            self._reject_refresh(exc.reason)

        subject = claims["sub"]
        if subject != owner:
            self._reject_refresh("subject does not match session owner")

        access = self.tokens.issue_access_token(subject, expires_delta=self.cfg.access_expires)
        return TokenPairOut(access_token=access, refresh_token=token)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the refresh token. Succeeds whether or not it was still tracked.

        :raises InvalidInputError: If no refresh token was supplied.
        """
        token = self._require_token(dto.refresh_token)
        existed = self.sessions.revoke(token)
        log.info("auth.logout", extra={"removed": int(existed)})

    # ------------------------------------------------------------------ #
    # Current user (pass-through)
    # ------------------------------------------------------------------ #

    @staticmethod
    def current_user(claims: Mapping[str, Any]) -> CurrentUserOut:
        """Surface an already-verified access-token claim set."""
        return CurrentUserOut(
            subject=str(claims["sub"]),
            issued_at=int(claims["iat"]),
            expires_at=int(claims["exp"]),
        )

    # ------------------------------------------------------------------ #
    # Maintenance
    # ------------------------------------------------------------------ #

    def revoke_all_sessions(self, owner: str) -> int:
        """Terminate every outstanding session of ``owner``."""
        removed = self.sessions.revoke_all(owner)
        log.info("sessions.revoke_all", extra={"subject": owner, "removed": removed})
        return removed

    def sweep_expired_sessions(self) -> int:
        """Drop expired sessions from the store."""
        removed = self.sessions.sweep_expired()
        level = log.info if removed else log.debug
        level("sessions.sweep", extra={"removed": removed})
        return removed

    def session_stats(self) -> SessionStoreStats:
        return self.sessions.stats()

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _require_token(token: str | None) -> str:
        if not token:
            raise InvalidInputError("Refresh token is required")
        return token

    @staticmethod
    def _reject_refresh(reason: str) -> NoReturn:
        log.warning("auth.refresh.rejected", extra={"reason": reason})
        raise TokenError(reason)
