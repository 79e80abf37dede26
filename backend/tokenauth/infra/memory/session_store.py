# tokenauth/infra/memory/session_store.py
from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tokenauth.services._shared.ports import (
    SessionRecord,
    SessionStore,
    SessionStoreStats,
    SessionSummary,
)

TOKEN_PREFIX_LENGTH = 10


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemorySessionStore(SessionStore):
    """
    Process-local refresh session store keyed by the refresh token string.

    One lock guards the whole map; every public method takes it, so the store
    can be shared by all request threads of a worker.

    :param clock: Callable returning the current aware UTC datetime.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._sessions: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    # -------------------------- API ----------------------------

    def save(self, token: str, owner: str, ttl: timedelta) -> None:
        if ttl <= timedelta(0):
            raise ValueError("Session TTL must be positive.")
        now = self._clock()
        with self._lock:
            self._sessions[token] = SessionRecord(
                token=token,
                owner=owner,
                issued_at=now,
                expires_at=now + ttl,
            )

    def verify(self, token: str) -> str | None:
        with self._lock:
            record = self._sessions.get(token)
            if record is None:
                return None
            if record.is_expired(self._clock()):
                # lazy expiry
                del self._sessions[token]
                return None
            return record.owner

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def revoke_all(self, owner: str) -> int:
        with self._lock:
            doomed = [t for t, r in self._sessions.items() if r.owner == owner]
            for token in doomed:
                del self._sessions[token]
            return len(doomed)

    def sweep_expired(self) -> int:
        now = self._clock()
        with self._lock:
            doomed = [t for t, r in self._sessions.items() if r.expires_at < now]
            for token in doomed:
                del self._sessions[token]
            return len(doomed)

    def stats(self) -> SessionStoreStats:
        now = self._clock()
        with self._lock:
            records = list(self._sessions.values())
        summaries = tuple(
            SessionSummary(
                token_prefix=r.token[:TOKEN_PREFIX_LENGTH] + "...",
                owner=r.owner,
                issued_at=r.issued_at,
                expires_at=r.expires_at,
                is_expired=r.is_expired(now),
            )
            for r in records
        )
        return SessionStoreStats(total=len(records), sessions=summaries)
