"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    ConnectionRequestAcceptView,
    ConnectionRequestRejectView,
    LivenessCheckView,
    NotificationFeedView,
    NotificationStreamView,
    ReadinessCheckView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Notification feed endpoints
    path(
        "users/me/notifications",
        NotificationFeedView.as_view(),
        name="notification-feed",
    ),
    path(
        "users/me/notifications/stream",
        NotificationStreamView.as_view(),
        name="notification-stream",
    ),
    # Connection request endpoints
    path(
        "connection-requests/<str:request_id>/accept",
        ConnectionRequestAcceptView.as_view(),
        name="connection-request-accept",
    ),
    path(
        "connection-requests/<str:request_id>/reject",
        ConnectionRequestRejectView.as_view(),
        name="connection-request-reject",
    ),
]
