"""Request-boundary helpers shared by the v1 blueprints."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, jsonify, request
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from tokenauth.core.errors import Unauthorized

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Unauthorized - Invalid or missing JWT token"


def json_response(payload: Any, *, status: int = 200) -> Response:
    """``jsonify`` with an explicit status code."""

    response = jsonify(payload)
    response.status_code = status
    return response


def json_body() -> Any:
    """Return the parsed JSON body, or ``{}`` when it is absent or unparsable."""

    return request.get_json(silent=True) or {}


def require_auth(func: F) -> F:
    """Verify the bearer access token and hand its claims to the view.

    Header lookup and decoding are left to Flask-JWT-Extended, so the
    ``JWT_HEADER_NAME`` and ``JWT_HEADER_TYPE`` settings apply. The view is
    called with ``claims=<verified claim set>``; a missing, malformed,
    expired or refresh-typed token ends the request with 401.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            verify_jwt_in_request(optional=False)
        except (JWTExtendedException, PyJWTError) as exc:
            log.info("auth.access.rejected", extra={"reason": f"{type(exc).__name__}: {exc}"})
            raise Unauthorized(UNAUTHORIZED_MESSAGE) from None
        return func(*args, claims=get_jwt(), **kwargs)

    return wrapper  # type: ignore[return-value]


def timing(func: F) -> F:
    """Log how long the view took, at DEBUG."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            log.debug(
                "request.elapsed",
                extra={
                    "endpoint": request.endpoint,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )

    return wrapper  # type: ignore[return-value]
