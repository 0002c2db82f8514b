"""Read-only view of the caller's permission matrix."""

from rest_framework.exceptions import NotAuthenticated

from core.response import BaseAPIView, api_response
from .catalog import DEFAULT_CATALOG, Role, is_valid_role
from .identity import ExternalIdentity


class RolePermissionsView(BaseAPIView):
    """Return the normalized role and its full matrix for the current identity.

    The admin UI uses this to hide actions the caller cannot perform; the
    server still enforces every decision independently.
    """

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        identity = request.user
        if not isinstance(identity, ExternalIdentity):
            raise NotAuthenticated()
        role = Role.normalize(identity.role_claim)
        return api_response(
            {
                "role": role.value,
                "role_claim_recognized": is_valid_role(identity.role_claim),
                "permissions": DEFAULT_CATALOG.role_permissions(role),
            }
        )


__all__ = ["RolePermissionsView"]
