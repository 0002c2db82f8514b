"""Middleware turning a bearer identity token into ``request.identity``."""

import logging

from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from authentication.services import TokenService
from .response import json_error

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = "Authentication credentials were not provided or are invalid."


class IdentityMiddleware(MiddlewareMixin):
    """Decode the identity token, if any, and attach its claims to the request."""

    def process_request(self, request):  # type: ignore[override]
        request.identity = None
        auth_header = request.META.get("HTTP_AUTHORIZATION", "")
        if not auth_header or not auth_header.startswith("Bearer "):
            return None

        token = auth_header.split(" ", 1)[1].strip()
        try:
            request.identity = TokenService.identity_from_token(token)
        except AuthenticationFailed as exc:
            logger.info("Rejected identity token: %s", exc.detail)
            return json_error(UNAUTHORIZED_MESSAGE, status.HTTP_401_UNAUTHORIZED)
        return None


__all__ = ["IdentityMiddleware", "UNAUTHORIZED_MESSAGE"]
