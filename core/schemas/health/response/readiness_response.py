"""Readiness probe response."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseSchemaModel):
    """Readiness of the service and of the hosted backend behind it.

    The service stays ready while the backend is down; ``degraded`` tells
    operators that feed calls are currently failing.
    """

    ready: bool = Field(..., description="Whether the service accepts traffic")
    status: str = Field(..., description="'ready' or 'degraded'")
    degraded: bool = Field(..., description="Whether the backend probe failed")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Probe result per dependency, keyed by name"
    )
