from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from tokenauth.services._shared.errors import TokenError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenProvider(Protocol):
    """Port for issuing and verifying signed JWT tokens."""

    def issue_access_token(self, owner: str, *, expires_delta: timedelta) -> str: ...

    def issue_refresh_token(self, owner: str, *, expires_delta: timedelta) -> str: ...

    def verify_access_token(self, token: str) -> dict[str, Any]:
        """Return the claim set of a valid access token or raise ``TokenError``."""
        ...

    def verify_refresh_token(self, token: str) -> dict[str, Any]:
        """Return the claim set of a valid refresh token or raise ``TokenError``."""
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(self, *, owner: str, ttype: str, exp_delta: timedelta) -> str:
        self._seq += 1
        now = datetime.now(UTC)
        token = f"{ttype}.{owner}.{self._seq}"
        self._issued[token] = {
            "sub": owner,
            "type": ttype,
            "jti": f"jti-{self._seq}",
            "iat": int(now.timestamp()),
            "exp": int((now + exp_delta).timestamp()),
        }
        return token

    def _verify(self, token: str, expected_type: str) -> dict[str, Any]:
        claims = self._issued.get(token)
        if claims is None:
            raise TokenError("unknown token")
        if claims["type"] != expected_type:
            raise TokenError(f"expected {expected_type} token")
        if int(datetime.now(UTC).timestamp()) >= claims["exp"]:
            raise TokenError("signature has expired")
        return dict(claims)

    def issue_access_token(self, owner: str, *, expires_delta: timedelta) -> str:
        return self._mk(owner=owner, ttype=ACCESS_TOKEN_TYPE, exp_delta=expires_delta)

    def issue_refresh_token(self, owner: str, *, expires_delta: timedelta) -> str:
        return self._mk(owner=owner, ttype=REFRESH_TOKEN_TYPE, exp_delta=expires_delta)

    def verify_access_token(self, token: str) -> dict[str, Any]:
        return self._verify(token, ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> dict[str, Any]:
        return self._verify(token, REFRESH_TOKEN_TYPE)
