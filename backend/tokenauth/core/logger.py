"""JSON logging with per-request correlation ids.

Every record leaving the root handler is one JSON object on stdout. Service
code attaches context with ``extra=``; only the keys in ``EXTRA_KEYS`` are
copied, so raw tokens or passwords cannot leak through an unexpected field.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

EXTRA_KEYS = ("endpoint", "elapsed_ms", "subject", "removed", "reason")


class JSONFormatter(logging.Formatter):
    """Render a record as ``{"time", "level", "name", "message", "request_id", ...}``."""

    def __init__(self, extra_keys: Iterable[str] = EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            {key: getattr(record, key) for key in self.extra_keys if hasattr(record, key)}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records emitted while a request is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """Return the id bound to the current request, creating it on first use.

    Inbound ``X-Request-ID`` / ``X-Correlation-ID`` headers win over a fresh
    UUID4. Outside a request a new UUID4 is returned each call.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        inbound = (request.headers.get(h) for h in INBOUND_ID_HEADERS)
        request_id = next((value for value in inbound if value), None) or str(uuid4())
        g.request_id = request_id
    return request_id


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO") -> logging.Handler:
    """Install a single JSON stdout handler on the root logger.

    Unknown level names fall back to ``INFO``. Above ``DEBUG`` the Werkzeug
    access log is limited to warnings.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    level_value = _resolve_level(level)
    root.setLevel(level_value)
    if level_value > logging.DEBUG:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    return handler


def init_app(app: Flask) -> None:
    """Bind a request id to each request and return it in ``X-Request-ID``."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _bind_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = ["JSONFormatter", "configure_logging", "ensure_request_id", "init_app"]
