"""Response schema for the merged notification feed."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.feed_notification import FeedNotification


class NotificationFeedResponse(BaseSchemaModel):
    """Merged feed, newest first, with the fixed display buckets.

    ``uncategorized_count`` counts entries whose category matches none of the
    display buckets; those entries appear in ``notifications`` but in no bucket.
    """

    notifications: list[FeedNotification] = Field(
        ..., description="All feed entries ordered by created_at descending"
    )
    buckets: dict[str, list[FeedNotification]] = Field(
        ..., description="Feed entries per display category, in tab order"
    )
    count: int = Field(..., description="Total number of feed entries")
    uncategorized_count: int = Field(
        ..., description="Entries not shown in any display category"
    )
