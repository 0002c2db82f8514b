"""Content viewsets guarded by RBACPermission and the publish governor."""

import logging

from access_control.catalog import ContentStatus, Resource
from access_control.exceptions import IDENTITY_UNRESOLVED, AuthorizationDenied
from access_control.permissions import RBACPermission
from access_control.services import PublishGovernor, get_authorization_service
from core.response import BaseViewSet
from .models import Article, News
from .serializers import ArticleSerializer, NewsSerializer

logger = logging.getLogger(__name__)


class PublishableContentViewSet(BaseViewSet):
    """CRUD for owned content whose ``status`` passes through the governor.

    Create stamps the caller's owner id; every write that carries ``status``
    re-evaluates publish rights, so a requested ``published`` may be stored
    as ``draft``.
    """

    permission_classes = [RBACPermission]
    resource: str = ""
    owner_field = "owner"
    governor = PublishGovernor()

    def get_queryset(self):
        return super().get_queryset().select_related("owner")

    def perform_create(self, serializer):
        identity = self.request.user
        owner_id = get_authorization_service().identity_resolver.resolve_owner_id(identity.email)
        if owner_id is None:
            raise AuthorizationDenied(identity.role_claim, IDENTITY_UNRESOLVED, self.resource, "create")

        requested = serializer.validated_data.get("status", ContentStatus.DRAFT)
        status = self.governor.resolve_status(identity.role_claim, self.resource, requested)
        instance = serializer.save(owner_id=owner_id, status=status)
        logger.info("Created %s %s by owner %s with status %s", self.resource, instance.pk, owner_id, status)

    def perform_update(self, serializer):
        identity = self.request.user
        extra = {}
        if "status" in serializer.validated_data:
            extra["status"] = self.governor.resolve_status(
                identity.role_claim, self.resource, serializer.validated_data["status"]
            )
        instance = serializer.save(**extra)
        decision = getattr(self.request, "authorization", None)
        logger.info(
            "Updated %s %s by owner %s",
            self.resource,
            instance.pk,
            decision.owner_id if decision else None,
        )


class ArticleViewSet(PublishableContentViewSet):
    serializer_class = ArticleSerializer
    queryset = Article.objects.all()
    resource = Resource.ARTICLES


class NewsViewSet(PublishableContentViewSet):
    serializer_class = NewsSerializer
    queryset = News.objects.all()
    resource = Resource.NEWS


__all__ = ["ArticleViewSet", "NewsViewSet", "PublishableContentViewSet"]
