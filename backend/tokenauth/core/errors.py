"""RFC 7807 problem responses for every error the API can surface.

All handlers funnel through :func:`problem_response`, so clients always see the
same shape::

    {"type": "about:blank", "title": "Unauthorized", "status": 401,
     "detail": "Invalid credentials", "instance": "/api/v1/auth/login",
     "code": "unauthorized", "request_id": "..."}

401 responses also carry ``WWW-Authenticate: Bearer`` (RFC 6750).
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from tokenauth.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"
BEARER_CHALLENGE = 'Bearer realm="api"'

# Stable machine codes; anything else becomes "error"
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    415: "unsupported_media_type",
    422: "unprocessable_entity",
    500: "internal_server_error",
}


def code_for_status(status: int) -> str:
    return STATUS_CODES.get(status, "error")


def build_problem(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return a Problem Details mapping for ``status``.

    :param status: HTTP status code.
    :param message: Client-safe summary placed in ``detail``.
    :param code: Machine code; derived from ``status`` when omitted.
    :param details: Optional structured payload.
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path if has_request_context() else None,
        "code": code or code_for_status(status),
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def problem_response(problem: dict[str, Any]) -> tuple[Response, int]:
    """Serialize ``problem`` and log it; 5xx at ERROR, 4xx at WARNING."""
    status = int(problem["status"])
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "problem: code=%s status=%s detail=%s",
        problem["code"],
        status,
        problem["detail"],
        exc_info=status >= 500,
    )
    resp = jsonify(problem)
    resp.mimetype = PROBLEM_MIMETYPE
    if status == HTTPStatus.UNAUTHORIZED:
        resp.headers["WWW-Authenticate"] = BEARER_CHALLENGE
    return resp, status


class APIError(Exception):
    """
    Error raised by the HTTP layer and rendered as a problem response.

    :param message: Client-safe description.
    :param status_code: HTTP status, ``400`` by default.
    :param code: Machine code, ``"bad_request"`` by default.
    :param details: Optional structured payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return build_problem(
            self.status_code, self.message, code=self.code, details=self.details or None
        )


class BadRequest(APIError):
    """400: missing or malformed client input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class Unauthorized(APIError):
    """401: bad credentials or an unusable token."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code="unauthorized")


def init_app(app: Flask) -> None:
    """Register the problem+json error handlers on ``app``."""

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(err.to_problem())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(build_problem(status, message))

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return problem_response(
            build_problem(
                HTTPStatus.UNPROCESSABLE_ENTITY,
                "Validation failed",
                code="validation_error",
                details={"errors": err.messages},
            )
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # never leak internals
        return problem_response(build_problem(HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error"))
