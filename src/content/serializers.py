"""Serializers for publishable content."""

from rest_framework import serializers

from access_control.catalog import ContentStatus
from .models import Article, News

CONTENT_FIELDS = ["id", "title", "excerpt", "body", "language", "status", "owner", "created_at", "updated_at"]


class ArticleSerializer(serializers.ModelSerializer):
    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    status = serializers.ChoiceField(choices=ContentStatus.choices, required=False)

    class Meta:
        """Ownership and timestamps are set by the server."""
        model = Article
        fields = CONTENT_FIELDS + ["premium"]
        read_only_fields = ["id", "owner", "created_at", "updated_at"]


class NewsSerializer(serializers.ModelSerializer):
    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    status = serializers.ChoiceField(choices=ContentStatus.choices, required=False)

    class Meta:
        model = News
        fields = CONTENT_FIELDS
        read_only_fields = ["id", "owner", "created_at", "updated_at"]


__all__ = ["ArticleSerializer", "NewsSerializer"]
