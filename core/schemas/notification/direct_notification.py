"""Schema for a notification row stored by the hosted backend."""

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel, ensure_utc
from core.schemas.profile import ProfileSummary


class DirectNotification(BaseSchemaModel):
    """A notification persisted in the ``notifications`` table.

    ``category`` is kept as a free string: rows may carry categories outside
    the display set, and those rows are simply never shown in a tab.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Notification identifier")
    title: str = Field(..., description="Notification title")
    content: str = Field("", description="Notification body text")
    category: str = Field(..., description="Category name as stored")
    created_at: datetime = Field(..., description="When the notification was created")
    sender_id: str | None = Field(None, description="ID of the sending user")
    sender: ProfileSummary | None = Field(None, description="Sender display metadata")
    is_connection_request: Literal[False] = Field(
        False, description="Always False for stored notifications"
    )

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Normalize the timestamp to UTC so feeds sort across sources."""
        return ensure_utc(v)
