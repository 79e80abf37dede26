"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

import logging

from flask import Flask

from tokenauth.core.config import DEFAULT_JWT_SECRET, BaseConfig, get_config
from tokenauth.core.logger import configure_logging, init_app as init_logging

log = logging.getLogger(__name__)

SESSION_SWEEPER_KEY = "session_sweeper"


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    if not (app.debug or app.testing) and app.config.get("JWT_SECRET_KEY") == DEFAULT_JWT_SECRET:
        log.warning("config.default_jwt_secret: set JWT_SECRET before serving real traffic")

    from tokenauth.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from tokenauth.core import cors

    cors.init_app(app)

    from tokenauth.api import init_app as init_api

    init_api(app)

    from tokenauth.core import errors

    errors.init_app(app)

    from tokenauth import cli as app_cli

    app_cli.init_app(app)

    # Background expiry sweep; stays off under TESTING
    from tokenauth.services.sessions.sweeper import start_session_sweeper

    app.extensions[SESSION_SWEEPER_KEY] = start_session_sweeper(
        app, app.extensions[extensions.AUTH_SERVICE_KEY]
    )

    return app
