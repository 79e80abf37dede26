"""Environment-driven settings.

``APP_ENV`` picks one of the classes below; each reads its values from the
process environment (and ``.env`` when present) at import time. The keys
starting with ``JWT_`` are consumed directly by Flask-JWT-Extended.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production
DEFAULT_JWT_SECRET: Final[str] = "dev-secret-change-me"

load_dotenv()

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) mean ``True``."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    """Read an integer, returning ``default`` when unset or unparsable.

    With ``minimum`` set, smaller values are raised to it.
    """
    raw = os.getenv(name)
    try:
        value = default if raw is None else int(raw)
    except ValueError:
        value = default
    if minimum is not None:
        value = max(minimum, value)
    return value


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    SERVICE_NAME: str
        Identifier reported by ``GET /api/v1/health``.
    JWT_SECRET_KEY: str
        HS256 signing key. ``JWT_SECRET`` wins over ``JWT_SECRET_KEY``.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        ``ACCESS_TOKEN_EXPIRES_MINUTES``, 15 by default, never below 1.
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        ``REFRESH_TOKEN_EXPIRES_DAYS``, 7 by default, never below 1. Also the
        lifetime of the server-side session record.
    AUTH_DEMO_USERNAME, AUTH_DEMO_PASSWORD: str
        The one principal accepted at login.
    SESSION_SWEEP_ENABLED: bool
        Run the background expiry sweeper.
    SESSION_SWEEP_INTERVAL_SECONDS: int
        Seconds between sweeps, never below 5.
    CORS_ORIGINS: str
        Comma-separated origins; ``*`` reflects whichever origin calls.
    LOG_LEVEL: str
        Root logger level.
    """

    API_BASE_PREFIX = "/api"
    SERVICE_NAME = os.getenv("SERVICE_NAME", "flask-token-auth-api")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET") or os.getenv("JWT_SECRET_KEY", DEFAULT_JWT_SECRET)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("ACCESS_TOKEN_EXPIRES_MINUTES", 15, minimum=1))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("REFRESH_TOKEN_EXPIRES_DAYS", 7, minimum=1))

    AUTH_DEMO_USERNAME = os.getenv("AUTH_DEMO_USERNAME", "admin")
    AUTH_DEMO_PASSWORD = os.getenv("AUTH_DEMO_PASSWORD", "Admin@123")

    SESSION_SWEEP_ENABLED = env_bool("SESSION_SWEEP_ENABLED", True)
    SESSION_SWEEP_INTERVAL_SECONDS = env_int("SESSION_SWEEP_INTERVAL_SECONDS", 300, minimum=5)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """Deterministic settings for pytest.

    The secret and the principal are pinned so a developer's environment
    cannot change test outcomes, and the sweeper thread never starts.
    """

    TESTING = True
    DEBUG = False
    PROPAGATE_EXCEPTIONS = True
    JWT_SECRET_KEY = "testing-secret-key-with-at-least-32-bytes"
    AUTH_DEMO_USERNAME = "admin"
    AUTH_DEMO_PASSWORD = "Admin@123"
    SESSION_SWEEP_ENABLED = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    PROPAGATE_EXCEPTIONS = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
