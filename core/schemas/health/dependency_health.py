"""Probe result of one dependency."""

from pydantic import Field

from core.enums.health_status import HealthStatus
from core.schemas.base_schema_model import BaseSchemaModel


class DependencyHealth(BaseSchemaModel):
    """Result of probing a dependency such as the hosted backend."""

    healthy: bool = Field(..., description="Whether the probe succeeded")
    status: HealthStatus = Field(..., description="Probe outcome")
    message: str = Field(..., description="Explanation of the outcome")
    response_time_ms: float | None = Field(
        None, description="Probe duration in milliseconds"
    )
