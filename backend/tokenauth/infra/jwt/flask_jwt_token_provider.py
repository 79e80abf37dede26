# tokenauth/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from tokenauth.services._shared.errors import TokenError
from tokenauth.services._shared.ports import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenProvider,
)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Signing, signature checks and expiry checks are delegated to the library
    (HS256 with ``JWT_SECRET_KEY``). This adapter only decides token type and
    lifetime, and turns library failures into :class:`TokenError`.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue_access_token(self, owner: str, *, expires_delta: timedelta) -> str:
        return cast(str, create_access_token(identity=owner, expires_delta=expires_delta))

    def issue_refresh_token(self, owner: str, *, expires_delta: timedelta) -> str:
        return cast(str, create_refresh_token(identity=owner, expires_delta=expires_delta))

    def verify_access_token(self, token: str) -> dict[str, Any]:
        return self._verify(token, ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> dict[str, Any]:
        return self._verify(token, REFRESH_TOKEN_TYPE)

    def _verify(self, token: str, expected_type: str) -> dict[str, Any]:
        try:
            claims = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise TokenError(f"{type(exc).__name__}: {exc}") from exc

        # Flask-JWT-Extended sets "type": "access" | "refresh"
        if claims.get("type") != expected_type:
            raise TokenError(f"expected {expected_type} token")
        if not isinstance(claims.get("sub"), str):
            raise TokenError("missing subject")
        return claims
