"""Response schema for an accepted or rejected connection request."""

from pydantic import Field

from core.enums import ConnectionRequestStatus
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.feed_notification import FeedNotification


class ConnectionRequestResolution(BaseSchemaModel):
    """Outcome of resolving a connection request, with the refreshed feed."""

    request_id: str = Field(..., description="ID of the resolved request")
    status: ConnectionRequestStatus = Field(..., description="New terminal status")
    connection_created: bool = Field(
        ..., description="Whether a bidirectional connection was materialized"
    )
    message: str = Field(..., description="User-visible notice")
    feed: list[FeedNotification] | None = Field(
        None, description="Feed refreshed after the resolution"
    )
    feed_refreshed: bool = Field(
        True, description="Whether the feed could be re-read after resolving"
    )
