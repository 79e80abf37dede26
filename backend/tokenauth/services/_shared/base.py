# tokenauth/services/_shared/base.py
from __future__ import annotations

from tokenauth.core import errors as api_errors
from tokenauth.services._shared.errors import (
    CredentialError,
    InvalidInputError,
    ServiceError,
    TokenError,
)


class BaseService:
    """
    Base class for application services.

    Services raise only :mod:`tokenauth.services._shared.errors`; the HTTP layer
    calls :meth:`translate_exceptions` to get the matching ``APIError``.
    """

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map a service error to the API error the client should see.

        Credential and token failures each collapse to one fixed message, so
        the response never reveals which check failed.

        :param exc: Exception raised within the service.
        :returns: Translated exception, or ``exc`` itself when it is not a
            :class:`ServiceError`.
        """
        if isinstance(exc, CredentialError):
            return api_errors.Unauthorized("Invalid credentials")

        if isinstance(exc, TokenError):
            return api_errors.Unauthorized("Invalid refresh token")

        if isinstance(exc, InvalidInputError):
            return api_errors.BadRequest(str(exc))

        if isinstance(exc, ServiceError):
            return api_errors.APIError(message=str(exc), status_code=400, code="bad_request")

        return exc
