"""Publishable, owned content: articles and news items."""

from django.db import models

from access_control.catalog import ContentStatus


class PublishableContent(models.Model):
    """Common fields for content that has an owner and a draft/published status."""

    title = models.CharField(max_length=150)
    excerpt = models.CharField(max_length=300, blank=True)
    body = models.TextField(blank=True)
    language = models.CharField(max_length=2, choices=[("ar", "Arabic"), ("en", "English")], default="ar")
    status = models.CharField(max_length=16, choices=ContentStatus.choices, default=ContentStatus.DRAFT)
    owner = models.ForeignKey("authentication.User", on_delete=models.PROTECT, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    @property
    def is_published(self) -> bool:
        return self.status == ContentStatus.PUBLISHED


class Article(PublishableContent):
    premium = models.BooleanField(default=False)

    class Meta(PublishableContent.Meta):
        pass


class News(PublishableContent):
    class Meta(PublishableContent.Meta):
        verbose_name_plural = "news"


__all__ = ["Article", "News", "PublishableContent"]
