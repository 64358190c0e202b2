"""Union type of every entry that can appear in a notification feed."""

from core.schemas.notification.connection_request_notification import (
    ConnectionRequestNotification,
)
from core.schemas.notification.direct_notification import DirectNotification

# Discriminated by ``is_connection_request``
FeedNotification = DirectNotification | ConnectionRequestNotification
