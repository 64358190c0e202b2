"""Response schema for a single display category of the feed."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.feed_notification import FeedNotification


class CategoryFeedResponse(BaseSchemaModel):
    """Feed entries of one display category, newest first."""

    category: str = Field(..., description="Display category name")
    notifications: list[FeedNotification] = Field(
        ..., description="Entries whose category matches, case-insensitively"
    )
    count: int = Field(..., description="Number of entries in the category")
