"""App configuration for publishable content."""

from django.apps import AppConfig


class ContentConfig(AppConfig):
    """Articles and news items with an owner and a draft/published status."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "content"
