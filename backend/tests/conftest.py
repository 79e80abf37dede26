"""Global pytest fixtures for the token auth API."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient, FlaskCliRunner
from freezegun import freeze_time as _freeze_time

from tokenauth import create_app
from tokenauth.core.config import TestingConfig

DEMO_USERNAME = TestingConfig.AUTH_DEMO_USERNAME
DEMO_PASSWORD = TestingConfig.AUTH_DEMO_PASSWORD


@pytest.fixture()
def app() -> Generator[Flask, None, None]:
    """Create a fresh testing application.

    Each test gets its own app, hence its own session store.
    """

    application = create_app(TestingConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a Flask test client."""

    return app.test_client()


@pytest.fixture()
def runner(app: Flask) -> FlaskCliRunner:
    """Return a runner for the ``flask`` CLI commands."""

    return app.test_cli_runner()


@pytest.fixture()
def freeze_time() -> Callable[..., Any]:
    """Expose :func:`freezegun.freeze_time` as a fixture.

    Usage::

        with freeze_time("2026-01-01 12:00:00") as frozen:
            frozen.tick(60)
    """

    return _freeze_time


@pytest.fixture()
def bearer() -> Callable[[str], dict[str, str]]:
    """Return a builder for ``Authorization: Bearer <token>`` headers."""

    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture()
def login(client: FlaskClient) -> Callable[..., dict[str, Any]]:
    """Log in through the API and return the token payload."""

    def _login(username: str = DEMO_USERNAME, password: str = DEMO_PASSWORD) -> dict[str, Any]:
        resp = client.post("/api/v1/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp.get_json()

    return _login
