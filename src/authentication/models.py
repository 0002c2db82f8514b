"""Owner records referenced by content and resolved from identity-token emails.

Authentication itself happens at the identity provider; a row here only
links an email to the integer id stored in content owner columns. Rows are
soft-deleted so historical ownership stays intact.
"""

from django.db import models
from django.utils import timezone

from access_control.catalog import Role
from .managers import UserManager


class User(models.Model):
    """Content owner identified by email."""

    email = models.EmailField(db_index=True)
    name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=32, choices=Role.choices, default=Role.VIEWER)
    subject_id = models.CharField(max_length=128, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    class Meta:
        """Default ordering shows newest users first."""
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.email

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        if self.deleted_at is None:
            self.deleted_at = timezone.now()
            self.save(update_fields=["deleted_at", "updated_at"])


__all__ = ["User"]
