"""Serializers for owner records and the current identity."""

from rest_framework import serializers

from access_control.catalog import Role
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Owner record payload; deletion state and timestamps are read-only."""

    role = serializers.ChoiceField(choices=Role.choices, default=Role.VIEWER)

    class Meta:
        """Expose identity fields; ``deleted_at`` is only set via DELETE."""
        model = User
        fields = ["id", "email", "name", "role", "subject_id", "deleted_at", "created_at", "updated_at"]
        read_only_fields = ["id", "deleted_at", "created_at", "updated_at"]

    def validate_email(self, value: str) -> str:
        """Store emails normalized and keep them unique among live users."""
        normalized = value.strip().lower()
        qs = User.objects.alive().with_email(normalized)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email already in use")
        return normalized


class IdentitySerializer(serializers.Serializer):
    """Read-only view of the caller's token claims plus the resolved owner id."""

    id = serializers.CharField(source="subject_id", allow_null=True)
    email = serializers.EmailField(allow_null=True)
    role = serializers.CharField()
    role_claim = serializers.CharField(allow_null=True)
    email_verified = serializers.BooleanField()
    owner_id = serializers.IntegerField(allow_null=True)


__all__ = ["IdentitySerializer", "UserSerializer"]
