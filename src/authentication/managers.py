"""Queryset helpers for owner records with soft deletion."""

from django.db import models
from django.db.models.functions import Lower, Trim
from django.utils import timezone


class UserQuerySet(models.QuerySet):
    """Queryset exposing soft-delete aware filters."""

    def alive(self):
        """Exclude soft-deleted rows."""
        return self.filter(deleted_at__isnull=True)

    def with_email(self, email: str):
        """Match ``email`` after trimming and lower-casing both sides."""
        normalized = (email or "").strip().lower()
        return self.annotate(normalized_email=Lower(Trim("email"))).filter(normalized_email=normalized)

    def soft_delete(self) -> int:
        """Stamp ``deleted_at`` on every live row in the queryset."""
        return self.alive().update(deleted_at=timezone.now())


UserManager = models.Manager.from_queryset(UserQuerySet)


__all__ = ["UserManager", "UserQuerySet"]
