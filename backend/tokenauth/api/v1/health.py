"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from tokenauth.api.deps import json_response, timing

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report liveness and the service identifier."""

    service = current_app.config.get("SERVICE_NAME", "flask-token-auth-api")
    return json_response({"status": "UP", "service": service})
