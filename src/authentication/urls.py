"""URL patterns for identity and owner record endpoints."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import MeView, UserViewSet

router = DefaultRouter()
router.register(r"users", UserViewSet, basename="user")

urlpatterns = [
    path("auth/me/", MeView.as_view(), name="auth-me"),
    path("", include(router.urls)),
]
