"""Profile summary joined onto notification and connection request rows."""

from pydantic import ConfigDict, Field

from core.schemas.base_schema_model import BaseSchemaModel


class ProfileSummary(BaseSchemaModel):
    """Display metadata of a user, embedded from the profiles table.

    The backend embeds this under ``sender`` for notifications and under
    ``requester`` for connection requests.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(None, description="Profile identifier")
    full_name: str | None = Field(None, description="Display name")
    avatar_url: str | None = Field(None, description="Avatar image URL")
