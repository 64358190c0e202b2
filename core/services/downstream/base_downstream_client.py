"""Base client for hosted backend communication."""

from typing import Any

import requests
import structlog

from core.config.backend import get_anon_key, get_request_timeout
from core.exceptions import BackendServiceError, BackendServiceUnavailableError

logger = structlog.get_logger(__name__)


class BaseDownstreamClient:
    """Base class for hosted backend HTTP clients.

    Every request carries the backend's public API key. Requests made on
    behalf of a viewer also carry the viewer's session token, so the
    backend applies its row-level access policy to that viewer.
    """

    def __init__(self, service_name: str, base_url: str | None = None):
        """Initialize base downstream client.

        Args:
            service_name: Name of the backend API (for logging/errors)
            base_url: Base URL for the API; resolved lazily from settings
                when not given
        """
        self.service_name = service_name
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        """Base URL of the backend API this client talks to."""
        return self._base_url or self._default_base_url()

    def _default_base_url(self) -> str:
        raise NotImplementedError

    @property
    def timeout(self) -> float:
        """Timeout in seconds for each request."""
        return get_request_timeout()

    def _get_headers(self, access_token: str | None = None) -> dict[str, str]:
        """Get common HTTP headers for requests.

        Args:
            access_token: Viewer session token; the public key is used as the
                bearer token when absent

        Returns:
            Dictionary of headers
        """
        anon_key = get_anon_key()
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apikey": anon_key,
            "Authorization": f"Bearer {access_token or anon_key}",
        }

    def _make_request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
        access_token: str | None = None,
        **kwargs,
    ) -> requests.Response:
        """Make HTTP request with error handling.

        Args:
            method: HTTP method (GET, PATCH, POST, ...)
            url: Full URL for the request
            params: Query parameters
            json_data: JSON body data
            access_token: Viewer session token to forward
            **kwargs: Additional arguments to pass to requests

        Returns:
            Response object

        Raises:
            BackendServiceError: For client errors (4xx except 404)
            BackendServiceUnavailableError: For server errors (5xx)
            requests.Timeout: For timeout errors
            requests.ConnectionError: For connection errors
        """
        headers = self._get_headers(access_token)
        if "headers" in kwargs:
            headers.update(kwargs.pop("headers"))
        kwargs.setdefault("timeout", self.timeout)

        logger.info(
            "Making backend request",
            service=self.service_name,
            method=method,
            url=url,
            params=params,
        )

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                **kwargs,
            )
        except requests.Timeout:
            logger.error(
                "Backend request timed out",
                service=self.service_name,
                method=method,
                url=url,
                timeout=kwargs["timeout"],
            )
            raise
        except requests.ConnectionError as e:
            logger.error(
                "Failed to connect to backend",
                service=self.service_name,
                method=method,
                url=url,
                error=str(e),
            )
            raise

        logger.info(
            "Received backend response",
            service=self.service_name,
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if response.status_code >= 500:
            logger.error(
                "Backend returned server error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise BackendServiceUnavailableError(
                service_name=self.service_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400 and response.status_code != 404:
            logger.error(
                "Backend returned client error",
                service=self.service_name,
                status_code=response.status_code,
                response_text=response.text,
            )
            raise BackendServiceError(
                message=(
                    f"{self.service_name} returned "
                    f"{response.status_code}: {response.text}"
                ),
                service_name=self.service_name,
                status_code=response.status_code,
            )

        return response
