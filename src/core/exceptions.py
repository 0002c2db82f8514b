"""Custom exception handling to enforce the API error envelope."""

import logging
from typing import Any

from django.conf import settings
from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from access_control.exceptions import AuthorizationDenied, StoreUnavailable
from .middleware import UNAUTHORIZED_MESSAGE
from .response import error_payload

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = "5"


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        return [payload["detail"]]
    return [payload]


def _service_unavailable(message: str) -> Response:
    response = Response(error_payload(message), status=status.HTTP_503_SERVICE_UNAVAILABLE)
    response["Retry-After"] = RETRY_AFTER_SECONDS
    return response


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF errors in `{ "data": null, "errors": [...] }` shape.

    - Store outages and connection-level database errors become 503 and are
      logged as infrastructure failures, never as authorization violations.
      Other database errors are left for Django to report as 500.
    - Authorization denials keep their specific message (role and reason).
    - Auth failures are normalized to 401; DEBUG_AUTH_ERRORS exposes detail.
    """

    if isinstance(exc, StoreUnavailable):
        logger.error("Authorization store unavailable: %s", exc, exc_info=exc)
        return _service_unavailable("Service temporarily unavailable.")

    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error("Database connection failure while handling request", exc_info=exc)
        return _service_unavailable("Service temporarily unavailable.")

    response = drf_exception_handler(exc, context)

    if response is None:
        return response

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            if getattr(settings, "DEBUG_AUTH_ERRORS", False):
                errors = _normalize_errors(response.data)
            else:
                errors = [UNAUTHORIZED_MESSAGE]
        elif isinstance(exc, AuthorizationDenied):
            errors = [str(exc.detail)]
            response["X-Denial-Reason"] = exc.reason
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            errors = ["You do not have permission to perform this action on this resource."]
        else:
            errors = _normalize_errors(response.data)

        response.data = error_payload(*errors)

    return response
