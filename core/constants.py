"""Constants used throughout the campus feed service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"

# Synthetic connection-request notifications
CONNECTION_NOTIFICATION_ID_PREFIX = "connection-"
CONNECTION_NOTIFICATION_TITLE = "Connection Request"
CONNECTION_NOTIFICATION_CONTENT = "{requester_name} wants to connect with you"
UNNAMED_REQUESTER = "Someone"
UNKNOWN_SENDER_NAME = "Unknown User"

# Realtime channel shared by the notification and connection request feeds
NOTIFICATION_CHANGES_CHANNEL = "notification-changes"

# User-visible notices
CONNECTION_ACCEPTED_MESSAGE = "Connection request accepted"
CONNECTION_REJECTED_MESSAGE = "Connection request rejected"
CONNECTION_FAILED_MESSAGE = "Failed to process connection request"
FEED_FAILED_MESSAGE = "Failed to load notifications"
