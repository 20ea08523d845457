# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Plain-text error responses for the registrar and resolver endpoints.

Transport-level failures (unparseable requests, missing parameters, backend
read errors, serialization failures) are answered with a non-2xx status and
the error message as the body. Registration business failures are not errors
at this level; they travel in the ``didState`` of a 200 response.
"""

from __future__ import annotations

import logging
import sys

from starlette.responses import PlainTextResponse

from didmethod.core.logging import get_request_id

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int = 400) -> PlainTextResponse:
    """Create a plain-text error response.

    Args:
        message: Error message sent as the body.
        status_code: HTTP status code (default 400).
    """
    return PlainTextResponse(message, status_code=status_code)


def bad_request(message: str) -> PlainTextResponse:
    """Create a 400 error response."""
    return error_response(message, status_code=400)


def invalid_request_error(exc: BaseException) -> PlainTextResponse:
    """Create a 400 error for a body that is not a valid registration request."""
    return bad_request(f"invalid request: {exc}")


def missing_param_error(name: str) -> PlainTextResponse:
    """Create a 400 error for a missing query parameter."""
    return bad_request(f"url param '{name}' is missing")


def internal_error(message: str, exc: BaseException | None = None) -> PlainTextResponse:
    """Create a 500 error response.

    The exception is logged together with the request ID of the current
    context, and the request ID is sent back in the ``X-Request-ID`` header
    for log correlation.

    Args:
        message: Error message sent as the body.
        exc: Optional exception to log. Defaults to the one being handled.
    """
    if exc is None:
        exc = sys.exc_info()[1]

    request_id = get_request_id()
    if exc is not None:
        logger.error("request_id=%s %s: %s", request_id, type(exc).__name__, exc)

    response = error_response(message, status_code=500)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response
