"""Global Flask extension instances and the auth component wiring."""

from __future__ import annotations

from flask import Flask, current_app
from flask_jwt_extended import JWTManager

from tokenauth.infra.credentials.static_validator import StaticCredentialValidator
from tokenauth.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from tokenauth.infra.memory.session_store import InMemorySessionStore
from tokenauth.services.auth.dto import AuthTokenConfig
from tokenauth.services.auth.service import AuthService

# Global singletons (import-safe)
jwt = JWTManager()

SESSION_STORE_KEY = "session_store"
TOKEN_PROVIDER_KEY = "token_provider"
AUTH_SERVICE_KEY = "auth_service"


def init_app(app: Flask) -> None:
    """Initialize the JWT extension and build the per-app auth components.

    Parameters
    ----------
    app: flask.Flask
        Application receiving the components under ``app.extensions``. Each
        app owns exactly one :class:`InMemorySessionStore`; nothing is shared
        at module level.
    """
    jwt.init_app(app)

    store = InMemorySessionStore()
    provider = JWTTokenProvider()
    service = AuthService(
        token_provider=provider,
        session_store=store,
        credentials=StaticCredentialValidator(
            username=app.config["AUTH_DEMO_USERNAME"],
            password=app.config["AUTH_DEMO_PASSWORD"],
        ),
        token_cfg=AuthTokenConfig.from_mapping(app.config),
    )
    app.extensions[SESSION_STORE_KEY] = store
    app.extensions[TOKEN_PROVIDER_KEY] = provider
    app.extensions[AUTH_SERVICE_KEY] = service


def get_auth_service() -> AuthService:
    """Return the auth service bound to the current application."""
    return current_app.extensions[AUTH_SERVICE_KEY]

