"""Schemas for the core app."""

from core.schemas.connection import ConnectionRequest, ConnectionRequestResolution
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.notification import (
    CategoryFeedResponse,
    ConnectionRequestNotification,
    DirectNotification,
    FeedNotification,
    NotificationFeedResponse,
)
from core.schemas.profile import ProfileSummary

__all__ = [
    "CategoryFeedResponse",
    "ConnectionRequest",
    "ConnectionRequestNotification",
    "ConnectionRequestResolution",
    "DependencyHealth",
    "DirectNotification",
    "FeedNotification",
    "LivenessResponse",
    "NotificationFeedResponse",
    "ProfileSummary",
    "ReadinessResponse",
]
