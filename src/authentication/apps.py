"""App configuration for owner records and identity tokens."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Holds the owner ``User`` table and the identity token service."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
