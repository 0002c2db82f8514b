"""Routing for access control endpoints."""

from django.urls import path

from .views import RolePermissionsView

urlpatterns = [
    path("access/permissions/", RolePermissionsView.as_view(), name="access-permissions"),
]
