"""CORS for the API prefix."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

ANY_ORIGIN = r".*"


def parse_origins(raw: str | None) -> list[str] | None:
    """Split ``CORS_ORIGINS``; ``None`` means "reflect any origin" (blank or ``*``)."""

    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or origins == ["*"]:
        return None
    return origins


def init_app(app: Flask) -> None:
    """Enable CORS on ``API_BASE_PREFIX/*``.

    With any-origin the caller's ``Origin`` is echoed back and credentials are
    not allowed; an explicit origin list turns credentials on.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")

    CORS(
        app,
        resources={rf"{prefix}/*": {"origins": ANY_ORIGIN if origins is None else origins}},
        supports_credentials=origins is not None,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
