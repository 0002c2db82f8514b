"""RBAC permission class mapping DRF view actions onto the permission catalog."""

from rest_framework import permissions
from rest_framework.exceptions import NotAuthenticated

from .catalog import Action
from .exceptions import MISSING_PERMISSION, AuthorizationDenied
from .identity import ExternalIdentity
from .ownership import OwnershipQuery
from .services import get_authorization_service

VIEWSET_ACTIONS = {
    "list": Action.LIST,
    "retrieve": Action.READ,
    "create": Action.CREATE,
    "update": Action.UPDATE,
    "partial_update": Action.UPDATE,
    "destroy": Action.DELETE,
}

# Actions that may be granted only to the resource owner.
OWNERSHIP_ACTIONS = frozenset({Action.UPDATE, Action.DELETE})


def resolve_action(view) -> Action | None:
    """Return the catalog action for the viewset action, or None if it has none."""
    return VIEWSET_ACTIONS.get(getattr(view, "action", None))


class RBACPermission(permissions.BasePermission):
    """Authorize the request against the view's ``resource``.

    Ownership-capable actions (update, delete) are pre-checked in
    ``has_permission`` so a caller without any grant is rejected before the
    object is loaded; the owner comparison happens in
    ``has_object_permission``. Everything else must be an outright Allow.
    """

    message = "You do not have permission to perform this action on this resource."

    def has_permission(self, request, view) -> bool:
        resource = getattr(view, "resource", None)
        if not resource:
            return False

        identity = self._get_identity(request)
        action = resolve_action(view)
        if action is None:
            raise AuthorizationDenied(identity.role_claim, MISSING_PERMISSION, resource)

        service = get_authorization_service()
        if action in OWNERSHIP_ACTIONS:
            decision = service.precheck(identity.role_claim, resource, action)
        else:
            decision = service.check_simple(identity.role_claim, resource, action)
        if not decision.authorized:
            raise AuthorizationDenied(identity.role_claim, decision.denial_reason, resource, action)
        return True

    def has_object_permission(self, request, view, obj) -> bool:
        action = resolve_action(view)
        if action not in OWNERSHIP_ACTIONS:
            return True

        identity = self._get_identity(request)
        resource = view.resource
        locator = OwnershipQuery.for_instance(obj, getattr(view, "owner_field", "owner"))
        decision = get_authorization_service().check_with_ownership(identity, resource, action, locator)
        if not decision.authorized:
            raise AuthorizationDenied(identity.role_claim, decision.denial_reason, resource, action)

        # Handlers read the resolved actor id from here for auditing.
        request.authorization = decision
        return True

    @staticmethod
    def _get_identity(request) -> ExternalIdentity:
        identity = getattr(request, "user", None)
        if not isinstance(identity, ExternalIdentity):
            raise NotAuthenticated()
        return identity


__all__ = ["OWNERSHIP_ACTIONS", "RBACPermission", "resolve_action"]
