"""URL configuration for the campus feed service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/campus-feed/", include("core.urls")),
]
