"""Schema for a notification derived from a pending connection request."""

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel, ensure_utc
from core.schemas.profile import ProfileSummary


class ConnectionRequestNotification(BaseSchemaModel):
    """Notification-shaped projection of a pending connection request.

    Never persisted. It exists for as long as the underlying request is
    pending and carries ``request_id`` so the request can be accepted or
    rejected from the feed.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="'connection-' followed by the request ID")
    title: str = Field(..., description="Notification title")
    content: str = Field(..., description="Notification body text")
    category: Literal["connections"] = Field(
        "connections", description="Always 'connections'"
    )
    created_at: datetime = Field(..., description="When the request was created")
    sender_id: str | None = Field(None, description="ID of the requesting user")
    sender: ProfileSummary | None = Field(None, description="Requester display metadata")
    is_connection_request: Literal[True] = Field(
        True, description="Always True for request-backed notifications"
    )
    request_id: str = Field(..., description="ID of the underlying connection request")

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Normalize the timestamp to UTC so feeds sort across sources."""
        return ensure_utc(v)
