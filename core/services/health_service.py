"""Health check service with cached backend probing."""

import logging
import time

import requests

from core.enums import HealthStatus
from core.exceptions import BackendServiceError
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.services.downstream import BackendClient, backend_client

logger = logging.getLogger(__name__)


class HealthService:
    """Service for performing health checks with caching."""

    def __init__(
        self, cache_ttl_seconds: float = 5.0, client: BackendClient | None = None
    ) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached health check results
            client: Backend client to probe; defaults to the shared instance
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self.client = client or backend_client
        self._backend_health_cache: DependencyHealth | None = None
        self._backend_health_cache_time: float = 0.0

    def get_liveness_status(self) -> LivenessResponse:
        """Get liveness status (always returns alive).

        Returns:
            LivenessResponse with status "alive"
        """
        return LivenessResponse(status="alive")

    def get_readiness_status(self) -> ReadinessResponse:
        """Get readiness status with the hosted backend health check.

        The service stays ready (degraded) when the backend is down: every
        feed call already reports backend failures to the caller.

        Returns:
            ReadinessResponse with overall status and dependency health
        """
        backend_health = self.check_backend_health()

        return ReadinessResponse(
            ready=True,
            status="ready" if backend_health.healthy else "degraded",
            degraded=not backend_health.healthy,
            dependencies={"backend": backend_health},
        )

    def check_backend_health(self) -> DependencyHealth:
        """Probe the hosted backend's REST API, caching the result.

        Returns:
            DependencyHealth with backend status
        """
        current_time = time.time()
        if (
            self._backend_health_cache is not None
            and (current_time - self._backend_health_cache_time)
            < self.cache_ttl_seconds
        ):
            return self._backend_health_cache

        start_time = time.perf_counter()
        try:
            self.client.ping()
            new_health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Backend reachable",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except requests.Timeout:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.TIMEOUT,
                message="Backend request timed out",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except requests.ConnectionError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.DISCONNECTED,
                message=f"Backend unreachable: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )
        except BackendServiceError as e:
            new_health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Backend returned an error: {e!s}",
                response_time_ms=(time.perf_counter() - start_time) * 1000,
            )

        if not new_health.healthy:
            logger.warning("Backend health check failed: %s", new_health.message)

        self._backend_health_cache = new_health
        self._backend_health_cache_time = current_time
        return new_health


# Global health service instance
health_service = HealthService()
