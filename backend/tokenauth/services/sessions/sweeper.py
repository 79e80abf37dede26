"""Background thread that periodically drops expired refresh sessions."""

from __future__ import annotations

import logging
import os
import threading

from flask import Flask

from tokenauth.services.auth.service import AuthService

log = logging.getLogger(__name__)


class SessionSweeper:
    """
    Call :meth:`AuthService.sweep_expired_sessions` every ``interval_seconds``.

    Lazy expiry in ``verify`` only cleans tokens that are presented again; the
    sweeper bounds the memory held by tokens that never come back.
    """

    def __init__(self, service: AuthService, interval_seconds: int) -> None:
        self._service = service
        self._interval_seconds = max(5, int(interval_seconds))
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="session-sweeper", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run_once(self) -> int:
        return self._service.sweep_expired_sessions()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self.run_once()
            except Exception:  # pragma: no cover - keep the loop alive
                log.exception("sessions.sweep_failed")


def should_start_sweeper(app: Flask) -> bool:
    if app.config.get("TESTING") or not app.config.get("SESSION_SWEEP_ENABLED", True):
        return False

    if app.debug:
        # only in the reloader child, not in the watcher process
        return os.environ.get("WERKZEUG_RUN_MAIN") == "true"
    return True


def start_session_sweeper(app: Flask, service: AuthService) -> SessionSweeper | None:
    if not should_start_sweeper(app):
        return None
    sweeper = SessionSweeper(service, int(app.config["SESSION_SWEEP_INTERVAL_SECONDS"]))
    sweeper.start()
    return sweeper
