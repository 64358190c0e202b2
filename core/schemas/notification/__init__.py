"""Notification schemas."""

from core.schemas.notification.connection_request_notification import (
    ConnectionRequestNotification,
)
from core.schemas.notification.direct_notification import DirectNotification
from core.schemas.notification.feed_notification import FeedNotification
from core.schemas.notification.response import (
    CategoryFeedResponse,
    NotificationFeedResponse,
)

__all__ = [
    "CategoryFeedResponse",
    "ConnectionRequestNotification",
    "DirectNotification",
    "FeedNotification",
    "NotificationFeedResponse",
]
