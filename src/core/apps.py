"""App configuration for shared project plumbing."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Settings, URLs, middleware and the API envelope."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
