"""Service for building a viewer's notification feed.

The feed merges two sources held by the hosted backend:

* notification rows, stored as-is, and
* pending connection requests addressed to the viewer, each projected into
  a synthetic ``connections`` notification.

The result is ordered newest first and can be partitioned into the fixed
display categories. Every refresh re-reads both sources; nothing is cached.
"""

from collections.abc import Iterable, Sequence

import structlog

from core.constants import (
    CONNECTION_NOTIFICATION_CONTENT,
    CONNECTION_NOTIFICATION_ID_PREFIX,
    CONNECTION_NOTIFICATION_TITLE,
    UNKNOWN_SENDER_NAME,
    UNNAMED_REQUESTER,
)
from core.enums import DISPLAY_CATEGORIES, NotificationCategory
from core.schemas.connection import ConnectionRequest
from core.schemas.notification import (
    ConnectionRequestNotification,
    FeedNotification,
    NotificationFeedResponse,
)
from core.schemas.profile import ProfileSummary
from core.services.downstream import BackendClient, backend_client

logger = structlog.get_logger(__name__)


def to_connection_notification(
    request: ConnectionRequest,
) -> ConnectionRequestNotification:
    """Project a pending connection request into the notification shape.

    Args:
        request: Pending connection request, ideally with requester embedded

    Returns:
        Synthetic notification carrying the request ID
    """
    requester = request.requester
    requester_name = requester.full_name if requester else None

    return ConnectionRequestNotification(
        id=f"{CONNECTION_NOTIFICATION_ID_PREFIX}{request.id}",
        title=CONNECTION_NOTIFICATION_TITLE,
        content=CONNECTION_NOTIFICATION_CONTENT.format(
            requester_name=requester_name or UNNAMED_REQUESTER
        ),
        created_at=request.created_at,
        sender_id=request.requester_id,
        sender=ProfileSummary(
            id=request.requester_id,
            full_name=requester_name or UNKNOWN_SENDER_NAME,
            avatar_url=requester.avatar_url if requester else None,
        ),
        request_id=request.id,
    )


def merge_feed(
    notifications: Iterable[FeedNotification],
    connection_notifications: Iterable[FeedNotification],
) -> list[FeedNotification]:
    """Concatenate both sources and order them newest first.

    The sort is stable, so entries with equal timestamps keep their
    concatenation order.
    """
    merged = [*notifications, *connection_notifications]
    merged.sort(key=lambda item: item.created_at, reverse=True)
    return merged


def by_category(
    feed: Iterable[FeedNotification], category: str
) -> list[FeedNotification]:
    """Select the feed entries of one category, compared case-insensitively."""
    wanted = category.lower()
    return [item for item in feed if item.category.lower() == wanted]


def partition_by_category(
    feed: Sequence[FeedNotification],
) -> dict[str, list[FeedNotification]]:
    """Split the feed into the display categories, in tab order.

    Entries whose category is not a display category land in no bucket.
    """
    return {category: by_category(feed, category) for category in DISPLAY_CATEGORIES}


def uncategorized(feed: Iterable[FeedNotification]) -> list[FeedNotification]:
    """Return the entries that no display category will show."""
    return [item for item in feed if NotificationCategory.from_name(item.category) is None]


class NotificationFeedService:
    """Service that pulls and reconciles a viewer's notification feed."""

    def __init__(self, client: BackendClient | None = None) -> None:
        """Initialize the feed service.

        Args:
            client: Backend client; defaults to the shared instance
        """
        self.client = client or backend_client

    def refresh(
        self, user_id: str, access_token: str | None = None
    ) -> list[FeedNotification]:
        """Re-read both sources and return the merged feed, newest first.

        Safe to call repeatedly and concurrently: it only reads.

        Args:
            user_id: ID of the viewer
            access_token: Viewer session token forwarded to the backend

        Returns:
            Merged feed ordered by created_at descending

        Raises:
            FetchError: If either read fails; not retried
        """
        notifications = self.client.list_notifications(access_token=access_token)
        pending_requests = self.client.list_pending_connection_requests(
            user_id, access_token=access_token
        )

        feed = merge_feed(
            notifications,
            (to_connection_notification(request) for request in pending_requests),
        )

        logger.info(
            "Notification feed refreshed",
            user_id=user_id,
            notification_count=len(notifications),
            pending_request_count=len(pending_requests),
        )
        return feed

    def get_feed(
        self, user_id: str, access_token: str | None = None
    ) -> NotificationFeedResponse:
        """Refresh the feed and partition it into the display categories.

        Args:
            user_id: ID of the viewer
            access_token: Viewer session token forwarded to the backend

        Returns:
            NotificationFeedResponse with the feed, its buckets and the
            number of entries no bucket shows

        Raises:
            FetchError: If either read fails
        """
        feed = self.refresh(user_id, access_token=access_token)

        hidden = uncategorized(feed)
        if hidden:
            logger.warning(
                "Feed contains notifications outside the display categories",
                user_id=user_id,
                hidden_count=len(hidden),
                categories=sorted({item.category for item in hidden}),
            )

        return NotificationFeedResponse(
            notifications=feed,
            buckets=partition_by_category(feed),
            count=len(feed),
            uncategorized_count=len(hidden),
        )


# Global service instance
notification_feed_service = NotificationFeedService()
