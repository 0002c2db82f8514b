"""Static RBAC permission matrix: role -> resource -> action -> permission value.

The matrix is immutable process-wide data. Every lookup is independent; there
is no role hierarchy, so "content_manager" does not inherit from "viewer".
"""

from types import MappingProxyType
from typing import Any, Mapping

from django.db import models


class Role(models.TextChoices):
    """Privilege tier carried in the identity token's role claim."""

    ADMIN = "admin", "Admin"
    CONTENT_MANAGER = "content_manager", "Content manager"
    CONTENT_SPECIALIST = "content_specialist", "Content specialist"
    VIEWER = "viewer", "Viewer"

    @classmethod
    def normalize(cls, value: Any) -> "Role":
        """Map any value outside the enum to VIEWER (fail-closed)."""
        try:
            return cls(value)
        except ValueError:
            return cls.VIEWER


class Resource(models.TextChoices):
    ARTICLES = "articles", "Articles"
    NEWS = "news", "News"
    SECTIONS = "sections", "Sections"
    TAGS = "tags", "Tags"
    TWEETS = "tweets", "Tweets"
    USERS = "users", "Users"
    SETTINGS = "settings", "Settings"
    ANALYTICS = "analytics", "Analytics"


class Action(models.TextChoices):
    CREATE = "create", "Create"
    READ = "read", "Read"
    UPDATE = "update", "Update"
    DELETE = "delete", "Delete"
    LIST = "list", "List"
    PUBLISH = "publish", "Publish"


class PermissionValue(models.TextChoices):
    ALLOW = "allow", "Allow"
    DENY = "deny", "Deny"
    ALLOW_IF_OWNER = "own", "Allow if owner"


class ContentStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"


ALLOW = PermissionValue.ALLOW
DENY = PermissionValue.DENY
OWN = PermissionValue.ALLOW_IF_OWNER

CRUD = (Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE, Action.LIST)

# Actions each resource defines. A role entry must declare exactly these keys.
RESOURCE_ACTIONS: Mapping[Resource, tuple[Action, ...]] = MappingProxyType(
    {
        Resource.USERS: CRUD,
        Resource.ARTICLES: CRUD + (Action.PUBLISH,),
        Resource.NEWS: CRUD + (Action.PUBLISH,),
        Resource.SECTIONS: CRUD,
        Resource.TAGS: CRUD,
        Resource.TWEETS: CRUD + (Action.PUBLISH,),
        Resource.SETTINGS: (Action.READ, Action.UPDATE),
        Resource.ANALYTICS: (Action.READ,),
    }
)


def _row(**actions: PermissionValue) -> dict[Action, PermissionValue]:
    return {Action(name): value for name, value in actions.items()}


PERMISSIONS = {
    Role.ADMIN: {
        Resource.USERS: _row(create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW),
        Resource.ARTICLES: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.NEWS: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.SECTIONS: _row(create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW),
        Resource.TAGS: _row(create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW),
        Resource.TWEETS: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.SETTINGS: _row(read=ALLOW, update=ALLOW),
        Resource.ANALYTICS: _row(read=ALLOW),
    },
    Role.CONTENT_MANAGER: {
        Resource.USERS: _row(create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW),
        Resource.ARTICLES: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.NEWS: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.SECTIONS: _row(create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW),
        Resource.TAGS: _row(create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW),
        Resource.TWEETS: _row(
            create=ALLOW, read=ALLOW, update=ALLOW, delete=ALLOW, list=ALLOW, publish=ALLOW
        ),
        Resource.SETTINGS: _row(read=DENY, update=DENY),
        Resource.ANALYTICS: _row(read=ALLOW),
    },
    Role.CONTENT_SPECIALIST: {
        Resource.USERS: _row(create=DENY, read=DENY, update=DENY, delete=DENY, list=DENY),
        # Own content only; publishing is reserved for managers.
        Resource.ARTICLES: _row(
            create=ALLOW, read=ALLOW, update=OWN, delete=OWN, list=ALLOW, publish=DENY
        ),
        Resource.NEWS: _row(
            create=ALLOW, read=ALLOW, update=OWN, delete=OWN, list=ALLOW, publish=DENY
        ),
        Resource.SECTIONS: _row(create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW),
        Resource.TAGS: _row(create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW),
        Resource.TWEETS: _row(
            create=DENY, read=DENY, update=DENY, delete=DENY, list=DENY, publish=DENY
        ),
        Resource.SETTINGS: _row(read=DENY, update=DENY),
        Resource.ANALYTICS: _row(read=DENY),
    },
    Role.VIEWER: {
        Resource.USERS: _row(create=DENY, read=DENY, update=DENY, delete=DENY, list=DENY),
        Resource.ARTICLES: _row(
            create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW, publish=DENY
        ),
        Resource.NEWS: _row(
            create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW, publish=DENY
        ),
        Resource.SECTIONS: _row(create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW),
        Resource.TAGS: _row(create=DENY, read=ALLOW, update=DENY, delete=DENY, list=ALLOW),
        Resource.TWEETS: _row(
            create=DENY, read=DENY, update=DENY, delete=DENY, list=DENY, publish=DENY
        ),
        Resource.SETTINGS: _row(read=DENY, update=DENY),
        Resource.ANALYTICS: _row(read=DENY),
    },
}


def _freeze(matrix):
    return MappingProxyType(
        {
            role: MappingProxyType(
                {resource: MappingProxyType(dict(actions)) for resource, actions in resources.items()}
            )
            for role, resources in matrix.items()
        }
    )


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        return None


class PermissionCatalog:
    """Read-only lookup over a role/resource/action matrix.

    ``permission_for`` is total: unknown roles, resources or actions and any
    combination the matrix does not list resolve to ``DENY``. Role
    normalization (unknown -> viewer) belongs to the engine, not here, so a
    role string missing from the matrix is simply denied.
    """

    def __init__(self, matrix=None, resource_actions=None) -> None:
        self._matrix = _freeze(PERMISSIONS if matrix is None else matrix)
        self._resource_actions = RESOURCE_ACTIONS if resource_actions is None else resource_actions

    def permission_for(self, role, resource, action) -> PermissionValue:
        """Return the permission value for the triple, ``DENY`` if unlisted."""
        role_key = _coerce(Role, role)
        resource_key = _coerce(Resource, resource)
        action_key = _coerce(Action, action)
        if role_key is None or resource_key is None or action_key is None:
            return DENY

        resources = self._matrix.get(role_key)
        if not resources:
            return DENY
        actions = resources.get(resource_key)
        if not actions:
            return DENY
        return actions.get(action_key, DENY)

    def can_perform(self, role, resource, action) -> bool:
        """True for ``ALLOW`` and ``ALLOW_IF_OWNER``."""
        return self.permission_for(role, resource, action) != DENY

    def is_ownership_based(self, role, resource, action) -> bool:
        return self.permission_for(role, resource, action) == OWN

    def role_permissions(self, role) -> dict[str, dict[str, str]]:
        """Return the role's full matrix as plain strings; unknown roles get viewer's."""
        resources = self._matrix.get(Role.normalize(role)) or self._matrix.get(Role.VIEWER, {})
        return {
            str(resource): {str(action): str(value) for action, value in actions.items()}
            for resource, actions in resources.items()
        }

    def missing_entries(self) -> list[str]:
        """List every gap between the matrix and the declared resource actions.

        An empty list means each role declares every resource with exactly the
        actions that resource defines.
        """
        problems: list[str] = []
        for role in Role:
            resources = self._matrix.get(role)
            if resources is None:
                problems.append(f"role '{role}' has no permission entry")
                continue
            for resource in Resource:
                expected = set(self._resource_actions.get(resource, ()))
                if not expected:
                    problems.append(f"resource '{resource}' declares no actions")
                    continue
                actions = resources.get(resource)
                if actions is None:
                    problems.append(f"role '{role}' is missing resource '{resource}'")
                    continue
                declared = set(actions)
                for action in sorted(expected - declared):
                    problems.append(f"role '{role}' is missing '{resource}.{action}'")
                for action in sorted(declared - expected):
                    problems.append(f"role '{role}' declares undefined '{resource}.{action}'")
        return problems


def is_valid_role(value) -> bool:
    return _coerce(Role, value) is not None


DEFAULT_CATALOG = PermissionCatalog()


__all__ = [
    "Action",
    "ContentStatus",
    "DEFAULT_CATALOG",
    "PERMISSIONS",
    "PermissionCatalog",
    "PermissionValue",
    "RESOURCE_ACTIONS",
    "Resource",
    "Role",
    "is_valid_role",
]
