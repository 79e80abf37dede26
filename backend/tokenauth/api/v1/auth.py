"""Authentication endpoints using the service layer."""

from __future__ import annotations

from typing import Any

from flask import Blueprint

from tokenauth.api.deps import json_body, json_response, require_auth, timing
from tokenauth.core.extensions import get_auth_service
from tokenauth.schemas import (
    CurrentUserSchema,
    LoginSchema,
    MessageSchema,
    RefreshTokenSchema,
    TokenResponseSchema,
)
from tokenauth.services._shared.errors import ServiceError
from tokenauth.services.auth.dto import LoginIn, LogoutIn, RefreshIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
token_schema = TokenResponseSchema()
current_user_schema = CurrentUserSchema()
message_schema = MessageSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair."""

    data = login_schema.load(json_body())
    service = get_auth_service()
    try:
        pair = service.login(
            LoginIn(username=data["username"] or "", password=data["password"] or "")
        )
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(token_schema.dump(pair))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new access token (no rotation)."""

    data = refresh_schema.load(json_body())
    service = get_auth_service()
    try:
        pair = service.refresh(RefreshIn(refresh_token=data["refresh_token"]))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(token_schema.dump(pair))


@bp.get("/me")
@require_auth
@timing
def me(*, claims: dict[str, Any]):
    """Return the claims of the presented access token."""

    user = get_auth_service().current_user(claims)
    return json_response({"user": current_user_schema.dump(user)})


@bp.post("/logout")
@require_auth
@timing
def logout(*, claims: dict[str, Any]):
    """Revoke the given refresh token. Succeeds even if it was already gone."""

    data = refresh_schema.load(json_body())
    service = get_auth_service()
    try:
        service.logout(LogoutIn(refresh_token=data["refresh_token"]))
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    return json_response(message_schema.dump({"message": "Logged out successfully"}))
