"""Services for the core app."""

from core.services.health_service import HealthService, health_service

# Note: the feed and connection request services are not exported here to
# keep app initialization free of client construction. Import directly from
# their modules.

__all__ = [
    "HealthService",
    "health_service",
]
