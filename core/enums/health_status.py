"""Health states reported for the hosted backend."""

from enum import Enum


class HealthStatus(str, Enum):
    """Outcome of probing the hosted backend's REST API."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    TIMEOUT = "timeout"
    DISCONNECTED = "disconnected"
