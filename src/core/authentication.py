"""DRF authenticator surfacing the identity attached by ``IdentityMiddleware``."""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication

from access_control.identity import ExternalIdentity


class MiddlewareIdentityAuthentication(BaseAuthentication):
    """Expose ``request._request.identity`` as DRF's ``request.user``.

    No token parsing happens here; the middleware has already verified the
    bearer token. Requests without an identity stay unauthenticated.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        identity = getattr(django_request, "identity", None)
        if not isinstance(identity, ExternalIdentity):
            return None
        return identity, None

    def authenticate_header(self, request) -> str:
        return "Bearer"


__all__ = ["MiddlewareIdentityAuthentication"]
