"""Notification response schemas."""

from core.schemas.notification.response.category_feed_response import (
    CategoryFeedResponse,
)
from core.schemas.notification.response.notification_feed_response import (
    NotificationFeedResponse,
)

__all__ = ["CategoryFeedResponse", "NotificationFeedResponse"]
