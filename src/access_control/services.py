"""Authorization decisions and publish-status governance.

Handlers call ``AuthorizationService`` before any mutation and, for
publishable content, ``PublishGovernor.resolve_status`` before persisting.
"""

import logging
from dataclasses import dataclass

from django.conf import settings

from core.redis_client import get_redis_client
from .catalog import DEFAULT_CATALOG, Action, ContentStatus, PermissionCatalog, PermissionValue, Role
from .exceptions import IDENTITY_UNRESOLVED, MISSING_PERMISSION, NOT_OWNER
from .identity import IdentityCache, IdentityResolver, RedisIdentityCache
from .ownership import OwnershipQuery, OwnershipResolver
from .store import DatabaseStore

logger = logging.getLogger(__name__)


class AuthorizationEngine:
    """Look up (role, resource, action) with unknown roles treated as viewer."""

    def __init__(self, catalog: PermissionCatalog | None = None) -> None:
        self.catalog = catalog or DEFAULT_CATALOG

    def decide(self, role, resource, action) -> PermissionValue:
        return self.catalog.permission_for(Role.normalize(role), resource, action)


@dataclass(frozen=True)
class AuthorizationDecision:
    authorized: bool
    owner_id: int | None = None
    denial_reason: str | None = None

    @classmethod
    def allow(cls, owner_id: int | None = None) -> "AuthorizationDecision":
        return cls(authorized=True, owner_id=owner_id)

    @classmethod
    def deny(cls, reason: str, owner_id: int | None = None) -> "AuthorizationDecision":
        return cls(authorized=False, owner_id=owner_id, denial_reason=reason)


class AuthorizationService:
    """Single entry point combining the engine with identity and ownership reads.

    Permission is always evaluated before any read, so a caller without the
    base permission never causes a resource lookup.
    """

    def __init__(
        self,
        engine: AuthorizationEngine,
        identity_resolver: IdentityResolver,
        ownership_resolver: OwnershipResolver,
    ) -> None:
        self.engine = engine
        self.identity_resolver = identity_resolver
        self.ownership_resolver = ownership_resolver

    def check_simple(self, role, resource, action) -> AuthorizationDecision:
        """Decide an action with no ownership notion (create, list, read)."""
        if self.engine.decide(role, resource, action) != PermissionValue.ALLOW:
            self._log_denial(role, resource, action, MISSING_PERMISSION)
            return AuthorizationDecision.deny(MISSING_PERMISSION)
        return AuthorizationDecision.allow()

    def precheck(self, role, resource, action) -> AuthorizationDecision:
        """Reject an update/delete outright when the role has no grant at all.

        Runs before the target is loaded and makes no reads; an ownership
        grant passes here and is settled by ``check_with_ownership``.
        """
        if self.engine.decide(role, resource, action) == PermissionValue.DENY:
            self._log_denial(role, resource, action, MISSING_PERMISSION)
            return AuthorizationDecision.deny(MISSING_PERMISSION)
        return AuthorizationDecision.allow()

    def check_with_ownership(self, identity, resource, action, locator: OwnershipQuery) -> AuthorizationDecision:
        """Decide an update/delete that may be restricted to the resource owner."""
        role = identity.role_claim
        permission = self.engine.decide(role, resource, action)

        if permission == PermissionValue.DENY:
            self._log_denial(role, resource, action, MISSING_PERMISSION)
            return AuthorizationDecision.deny(MISSING_PERMISSION)

        actor_id = self.identity_resolver.resolve_owner_id(identity.email)

        if permission == PermissionValue.ALLOW:
            return AuthorizationDecision.allow(owner_id=actor_id)

        # AllowIfOwner: an unresolved actor never owns anything, even a row
        # whose owner column is also NULL.
        if actor_id is None:
            self._log_denial(role, resource, action, IDENTITY_UNRESOLVED)
            return AuthorizationDecision.deny(IDENTITY_UNRESOLVED)

        resource_owner_id = self.ownership_resolver.fetch_owner_id(locator)
        if not self.ownership_resolver.is_owner(resource_owner_id, actor_id):
            self._log_denial(role, resource, action, NOT_OWNER)
            return AuthorizationDecision.deny(NOT_OWNER, owner_id=actor_id)

        return AuthorizationDecision.allow(owner_id=actor_id)

    @staticmethod
    def _log_denial(role, resource, action, reason: str) -> None:
        logger.info(
            "Authorization denied: role=%s resource=%s action=%s reason=%s",
            role,
            resource,
            action,
            reason,
        )


class PublishGovernor:
    """Narrow a requested ``published`` status to ``draft`` without publish rights.

    Only ``published`` is ever changed. Unpublishing needs no special right,
    and the check runs on every write, so a demoted user loses publish rights
    on their next request.
    """

    def __init__(self, engine: AuthorizationEngine | None = None) -> None:
        self.engine = engine or AuthorizationEngine()

    def can_publish(self, role, resource) -> bool:
        return self.engine.decide(role, resource, Action.PUBLISH) == PermissionValue.ALLOW

    def resolve_status(self, role, resource, requested_status):
        if requested_status != ContentStatus.PUBLISHED:
            return requested_status
        if self.can_publish(role, resource):
            return ContentStatus.PUBLISHED
        logger.info("Downgrading publish request to draft: role=%s resource=%s", role, resource)
        return ContentStatus.DRAFT


def build_identity_cache() -> IdentityCache:
    """Return a Redis cache when ``IDENTITY_CACHE_TTL`` is positive, else a no-op cache."""
    ttl = int(getattr(settings, "IDENTITY_CACHE_TTL", 0) or 0)
    if ttl <= 0:
        return IdentityCache()
    return RedisIdentityCache(get_redis_client(), ttl)


def get_authorization_service(store=None, cache: IdentityCache | None = None) -> AuthorizationService:
    """Wire an ``AuthorizationService`` over the database store and configured cache."""
    store = store or DatabaseStore()
    if cache is None:
        cache = build_identity_cache()
    return AuthorizationService(
        engine=AuthorizationEngine(),
        identity_resolver=IdentityResolver(store, cache),
        ownership_resolver=OwnershipResolver(store),
    )


__all__ = [
    "AuthorizationDecision",
    "AuthorizationEngine",
    "AuthorizationService",
    "PublishGovernor",
    "build_identity_cache",
    "get_authorization_service",
]
