"""Shared pydantic base for API and backend row schemas."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    ``timestamp`` columns come back without an offset and are taken to be
    UTC; ``timestamptz`` columns are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BaseSchemaModel(BaseModel):
    """Base model for every schema in the service.

    Backend rows arrive with snake_case columns and are validated by field
    name; camelCase aliases are accepted as well. Columns the schema does
    not declare are ignored, so new backend columns never break reads.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
