"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class LoginSchema(Schema):
    """Input payload for authenticating the demo principal.

    Missing or null fields end up as empty strings so that they fail the
    credential check with the same error as a wrong password.
    """

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default="", allow_none=True)
    password = fields.String(load_default="", allow_none=True)


class RefreshTokenSchema(Schema):
    """Input payload carrying a refresh token (refresh and logout)."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class TokenResponseSchema(Schema):
    """Response payload containing the token pair."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
    token_type = fields.String(data_key="tokenType", dump_default="Bearer")


class CurrentUserSchema(Schema):
    """Claims of the verified access token."""

    subject = fields.String(required=True)
    issued_at = fields.Integer(data_key="issuedAt", required=True)
    expires_at = fields.Integer(data_key="expiresAt", required=True)


class MessageSchema(Schema):
    message = fields.String(required=True)
