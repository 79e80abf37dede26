"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    CurrentUserSchema,
    LoginSchema,
    MessageSchema,
    RefreshTokenSchema,
    TokenResponseSchema,
)

__all__ = [
    "CurrentUserSchema",
    "LoginSchema",
    "MessageSchema",
    "RefreshTokenSchema",
    "TokenResponseSchema",
]
