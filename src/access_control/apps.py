"""App config for the authorization core (catalog, identity resolution, decisions)."""

from django.apps import AppConfig


class AccessControlConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "access_control"
    verbose_name = "Access control"

    def ready(self) -> None:
        """Register the catalog and viewset checks with ``manage.py check``."""
        from . import checks  # noqa: F401
