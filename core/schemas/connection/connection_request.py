"""Schema for a row of the connection_requests table."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from core.enums import ConnectionRequestStatus
from core.schemas.base_schema_model import BaseSchemaModel, ensure_utc
from core.schemas.profile import ProfileSummary


class ConnectionRequest(BaseSchemaModel):
    """A one-directional proposal to form a connection.

    ``requester`` is only present when the row was selected with the
    requester profile embedded.
    """

    # Status keeps its enum type so transitions can be checked on it
    model_config = ConfigDict(use_enum_values=False)

    id: str = Field(..., description="Connection request identifier")
    requester_id: str | None = Field(None, description="ID of the requesting user")
    recipient_id: str | None = Field(None, description="ID of the receiving user")
    status: ConnectionRequestStatus = Field(..., description="Lifecycle state")
    created_at: datetime = Field(..., description="When the request was created")
    requester: ProfileSummary | None = Field(
        None, description="Requester display metadata"
    )

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Normalize the timestamp to UTC."""
        return ensure_utc(v)
