"""URL configuration for the notification engine project."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/notification/", include("core.urls")),
]
