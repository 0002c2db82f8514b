"""Owner record management and the current-identity endpoint."""

from rest_framework.exceptions import NotAuthenticated

from access_control.catalog import Resource, Role
from access_control.identity import ExternalIdentity
from access_control.permissions import RBACPermission
from access_control.services import get_authorization_service
from core.response import BaseAPIView, BaseViewSet, api_response
from .models import User
from .serializers import IdentitySerializer, UserSerializer


class MeView(BaseAPIView):
    """Describe the authenticated caller as the backend sees them."""

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return token claims, normalized role and resolved owner id."""
        identity = request.user
        if not isinstance(identity, ExternalIdentity):
            raise NotAuthenticated()
        owner_id = get_authorization_service().identity_resolver.resolve_owner_id(identity.email)
        payload = {
            "subject_id": identity.subject_id,
            "email": identity.email,
            "role": Role.normalize(identity.role_claim).value,
            "role_claim": identity.role_claim,
            "email_verified": identity.email_verified,
            "owner_id": owner_id,
        }
        return api_response(IdentitySerializer(payload).data)


class UserViewSet(BaseViewSet):
    """CRUD over owner records; DELETE soft-deletes."""

    serializer_class = UserSerializer
    permission_classes = [RBACPermission]
    resource = Resource.USERS
    # A user record is owned by the user it describes.
    owner_field = "id"

    def get_queryset(self):
        return User.objects.alive()

    @staticmethod
    def _forget_emails(*emails):
        # Cached email -> owner id entries must not outlive the row they point at.
        get_authorization_service().identity_resolver.forget(*emails)

    def perform_create(self, serializer):
        user = serializer.save()
        self._forget_emails(user.email)

    def perform_update(self, serializer):
        previous_email = serializer.instance.email
        user = serializer.save()
        self._forget_emails(previous_email, user.email)

    def perform_destroy(self, instance):
        instance.soft_delete()
        self._forget_emails(instance.email)


__all__ = ["MeView", "UserViewSet"]
