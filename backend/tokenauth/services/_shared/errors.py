"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP directly. They serve as stable contracts between the session
store, the token provider and the application services.

The translation to HTTP responses (RFC 7807) is handled by
``tokenauth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` through
      ``BaseService.translate_exceptions``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class CredentialError(ServiceError):
    """
    Raised when submitted credentials do not match the known principal.

    The message is the same whichever field was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class TokenError(ServiceError):
    """
    Raised when a token is missing from the store, expired, revoked or fails
    cryptographic verification.

    :param reason: Internal sub-cause, kept for logs and never shown to clients.
    :type reason: str
    """

    def __init__(self, reason: str = "invalid token") -> None:
        super().__init__("Invalid token")
        self.reason = reason


class InvalidInputError(ServiceError):
    """Raised for malformed or missing client input, before any store access."""

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)
