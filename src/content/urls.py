"""Routing for content viewsets."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import ArticleViewSet, NewsViewSet

router = DefaultRouter()
router.register(r"articles", ArticleViewSet, basename="article")
router.register(r"news", NewsViewSet, basename="news")

urlpatterns = [
    path("", include(router.urls)),
]
