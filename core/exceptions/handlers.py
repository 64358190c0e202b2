"""DRF exception handler for the campus feed API."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.constants import CONNECTION_FAILED_MESSAGE, FEED_FAILED_MESSAGE
from core.exceptions.backend_exceptions import (
    BackendServiceError,
    ConnectionCreationError,
    ConnectionRequestNotFoundError,
    RequestAlreadyResolvedError,
    UpdateError,
)
from core.logging.context import get_request_id

logger = logging.getLogger(__name__)

# Checked in order: subclasses before their bases
_ERROR_STATUSES: tuple[tuple[type[Exception], int, str | None], ...] = (
    (ConnectionRequestNotFoundError, status.HTTP_404_NOT_FOUND, None),
    (UpdateError, status.HTTP_502_BAD_GATEWAY, CONNECTION_FAILED_MESSAGE),
    (ConnectionCreationError, status.HTTP_502_BAD_GATEWAY, CONNECTION_FAILED_MESSAGE),
    (BackendServiceError, status.HTTP_502_BAD_GATEWAY, FEED_FAILED_MESSAGE),
)

_EXPECTED_ERRORS = (ConnectionRequestNotFoundError, RequestAlreadyResolvedError)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response:
    """Turn exceptions raised by views into JSON error responses.

    DRF's own exceptions keep DRF's rendering. Hosted backend failures become
    ``{status, message, request_id, timestamp}`` bodies: a missing connection
    request is a 404, and every other backend failure is a 502 carrying the
    notice shown to the user. The client recovers by retrying the call.
    Resolving a request that already left ``pending`` is a 409 with a
    ``detail`` naming its current state.

    Args:
        exc: The exception raised by the view.
        context: DRF context with the view and request.

    Returns:
        The error Response.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    response = exception_handler(exc, context)
    if response is None:
        response = _build_response(exc, request_id)

    if request_id:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)
    return response


def _build_response(exc: Exception, request_id: str | None) -> Response:
    if isinstance(exc, RequestAlreadyResolvedError):
        return Response(
            {
                "error": "conflict",
                "message": str(exc),
                "detail": exc.detail,
                "request_id": request_id,
                "timestamp": _now(),
            },
            status=status.HTTP_409_CONFLICT,
        )

    for exc_type, status_code, message in _ERROR_STATUSES:
        if isinstance(exc, exc_type):
            return Response(
                _error_body(status_code, message or str(exc), request_id),
                status=status_code,
            )

    return Response(
        _error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal server error occurred.",
            request_id,
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _error_body(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    """Build the standard error body."""
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": _now(),
    }


def _log_exception(exc: Exception, request: Any, response: Response) -> None:
    """Log one line per handled exception.

    Client errors and expected outcomes of resolving a request log at
    WARNING, everything else at ERROR. With DEBUG on, the line also carries
    the stack trace and request details.
    """
    if isinstance(exc, _EXPECTED_ERRORS):
        log_level = logging.WARNING
    elif isinstance(exc, (Http404, APIException)) and response.status_code < 500:
        log_level = logging.WARNING
    else:
        log_level = logging.ERROR

    method = request.method if request else "unknown"
    path = request.path if request else "unknown"
    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {method} {path} | Status: {response.status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"
        if request:
            log_message += f"\nRequest details: {_describe_request(request)}"

    logger.log(log_level, log_message)


def _describe_request(request: Any) -> str:
    details = {
        "method": request.method,
        "path": request.path,
        "user": getattr(request, "user", "anonymous"),
        "ip": request.META.get("REMOTE_ADDR", "unknown"),
    }
    if request.GET:
        details["query_params"] = dict(request.GET)
    return str(details)
