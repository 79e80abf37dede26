from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """
    Server-side bookkeeping entry for one outstanding refresh token.

    :ivar token: Encoded refresh token, the store key.
    :ivar owner: Username of the authenticated principal.
    :ivar issued_at: Creation instant (UTC).
    :ivar expires_at: Instant after which the record is invalid (UTC).
    """

    token: str
    owner: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass(frozen=True, slots=True)
class SessionSummary:
    """Masked, read-only view of a session record for diagnostics."""

    token_prefix: str
    owner: str
    issued_at: datetime
    expires_at: datetime
    is_expired: bool


@dataclass(frozen=True, slots=True)
class SessionStoreStats:
    """Point-in-time snapshot of the store contents."""

    total: int
    sessions: tuple[SessionSummary, ...]


class SessionStore(Protocol):
    """
    Stateful store for refresh sessions.

    Every operation MUST be safe to call from concurrent request threads, and
    ``revoke`` MUST be idempotent.
    """

    def save(self, token: str, owner: str, ttl: timedelta) -> None:
        """Insert or overwrite the record for ``token``, valid for ``ttl``."""

    def verify(self, token: str) -> str | None:
        """
        Return the owner of ``token`` or ``None``.

        An expired record is deleted as a side effect.
        """

    def revoke(self, token: str) -> bool:
        """Remove ``token`` if present. :returns: True if it existed."""

    def revoke_all(self, owner: str) -> int:
        """
        Remove every record belonging to ``owner``.

        :returns: Number of records removed.
        """

    def sweep_expired(self) -> int:
        """
        Remove every record past its expiry.

        :returns: Number of records removed.
        """

    def stats(self) -> SessionStoreStats:
        """Return a masked snapshot of the current records."""
