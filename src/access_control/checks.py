"""System checks for RBAC configuration."""

from django.core.checks import Error, register

from access_control.catalog import DEFAULT_CATALOG, Resource
from access_control.permissions import RBACPermission


@register()
def permission_catalog_is_exhaustive(app_configs, **kwargs):
    """Fail when any role omits a resource or action the catalog defines.

    A gap would otherwise silently resolve to Deny at request time.
    """
    return [
        Error(problem, hint="Update access_control.catalog.PERMISSIONS.", id="access_control.E001")
        for problem in DEFAULT_CATALOG.missing_entries()
    ]


@register()
def rbac_views_declare_resource(app_configs, **kwargs):
    """Ensure RBAC-protected views declare a valid ``resource`` attribute."""
    errors: list[Error] = []

    # Import here to avoid circular imports at module load time.
    from authentication.views import UserViewSet
    from content.views import ArticleViewSet, NewsViewSet

    rbac_views = [ArticleViewSet, NewsViewSet, UserViewSet]

    for view_cls in rbac_views:
        if RBACPermission not in getattr(view_cls, "permission_classes", []):
            continue
        resource = getattr(view_cls, "resource", None)
        if resource not in Resource.values:
            errors.append(
                Error(
                    f"{view_cls.__name__} uses RBACPermission but does not "
                    f"define a known resource.",
                    obj=view_cls,
                    id="access_control.E002",
                )
            )

    return errors
