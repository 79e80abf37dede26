# tokenauth/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

TOKEN_TYPE_BEARER = "Bearer"

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Submitted username (may be empty).
    :type username: str
    :param password: Submitted raw password (may be empty).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT, ``None`` when the client sent none.
    :type refresh_token: str | None
    """

    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Encoded refresh JWT to revoke.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param token_type: Always ``"Bearer"``.
    :type token_type: str
    """

    access_token: str
    refresh_token: str
    token_type: str = TOKEN_TYPE_BEARER


@dataclass(frozen=True, slots=True)
class CurrentUserOut:
    """
    Output DTO surfacing a verified access-token claim set.

    :param subject: ``sub`` claim.
    :param issued_at: ``iat`` claim (unix seconds).
    :param expires_at: ``exp`` claim (unix seconds).
    """

    subject: str
    issued_at: int
    expires_at: int


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from the same keys Flask-JWT-Extended reads."""
        defaults = cls()
        return cls(
            access_expires=config.get("JWT_ACCESS_TOKEN_EXPIRES", defaults.access_expires),
            refresh_expires=config.get("JWT_REFRESH_TOKEN_EXPIRES", defaults.refresh_expires),
        )
