"""
tokenauth.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts
for credential checks, token issuing and refresh-session storage.

These ports decouple the service layer from concrete implementations.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for JWT issuing and verification,
    plus :class:`~.StubTokenProvider` for unit tests.

- :mod:`session_store`:
    Defines :class:`~.SessionStore`, :class:`~.SessionRecord` and the read-only
    :class:`~.SessionStoreStats` snapshot.

- :mod:`credential_validator`:
    Defines :class:`~.CredentialValidator`: the identity check used at login.

Concrete adapters live under ``tokenauth.infra``.
"""

from __future__ import annotations

from .credential_validator import CredentialValidator
from .session_store import SessionRecord, SessionStore, SessionStoreStats, SessionSummary
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    StubTokenProvider,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "CredentialValidator",
    "SessionRecord",
    "SessionStore",
    "SessionStoreStats",
    "SessionSummary",
    "StubTokenProvider",
    "TokenProvider",
]
