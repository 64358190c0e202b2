"""Client for the hosted backend's row-level REST API."""

from typing import Any

import requests
import structlog
from pydantic import ValidationError

from core.config.backend import get_rest_url
from core.enums import ConnectionRequestStatus
from core.exceptions import (
    BackendServiceError,
    ConnectionRequestNotFoundError,
    FetchError,
    UpdateError,
)
from core.schemas.connection import ConnectionRequest
from core.schemas.notification import DirectNotification
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)

PROFILE_COLUMNS = "id,full_name,avatar_url"
NOTIFICATION_SELECT = f"*,sender:profiles!sender_id({PROFILE_COLUMNS})"
PENDING_REQUEST_SELECT = (
    f"id,created_at,requester_id,recipient_id,status,"
    f"requester:profiles!requester_id({PROFILE_COLUMNS})"
)
REQUEST_IDENTITY_SELECT = "id,requester_id,recipient_id,status,created_at"


class BackendClient(BaseDownstreamClient):
    """Client for the notifications and connection_requests tables.

    Reads and writes go through the backend's row-level access policy keyed
    on the session token passed in, so a viewer only sees and changes the
    rows the policy grants them.
    """

    def __init__(self, base_url: str | None = None):
        """Initialize backend client."""
        super().__init__(service_name="backend-rest", base_url=base_url)

    def _default_base_url(self) -> str:
        return get_rest_url()

    def ping(self) -> None:
        """Check that the REST API answers.

        Raises:
            BackendServiceError: If the API answers with an error
            requests.RequestException: If the API cannot be reached
        """
        self._make_request("GET", f"{self.base_url}/")

    def list_notifications(
        self, access_token: str | None = None
    ) -> list[DirectNotification]:
        """Fetch every notification visible to the session, newest first.

        Each row is joined with the sender's profile.

        Args:
            access_token: Viewer session token

        Returns:
            List of notifications

        Raises:
            FetchError: If the backend call fails or returns malformed rows
        """
        rows = self._fetch_rows(
            resource="notifications",
            params={"select": NOTIFICATION_SELECT, "order": "created_at.desc"},
            access_token=access_token,
        )
        try:
            return [DirectNotification.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(
                "Failed to validate notification rows",
                validation_errors=e.errors(),
            )
            raise FetchError(
                "notifications",
                message="Backend returned malformed notification rows",
                service_name=self.service_name,
            ) from e

    def list_pending_connection_requests(
        self, recipient_id: str, access_token: str | None = None
    ) -> list[ConnectionRequest]:
        """Fetch pending connection requests addressed to a user, newest first.

        Each row is joined with the requester's profile.

        Args:
            recipient_id: ID of the user receiving the requests
            access_token: Viewer session token

        Returns:
            List of pending connection requests

        Raises:
            FetchError: If the backend call fails or returns malformed rows
        """
        rows = self._fetch_rows(
            resource="connection_requests",
            params={
                "select": PENDING_REQUEST_SELECT,
                "recipient_id": f"eq.{recipient_id}",
                "status": f"eq.{ConnectionRequestStatus.PENDING.value}",
                "order": "created_at.desc",
            },
            access_token=access_token,
        )
        return self._parse_requests(rows)

    def get_connection_request(
        self, request_id: str, access_token: str | None = None
    ) -> ConnectionRequest:
        """Fetch a single connection request with its participant identities.

        Args:
            request_id: ID of the connection request
            access_token: Viewer session token

        Returns:
            The connection request

        Raises:
            ConnectionRequestNotFoundError: If no visible row has this ID
            FetchError: If the backend call fails
        """
        rows = self._fetch_rows(
            resource="connection_requests",
            params={"select": REQUEST_IDENTITY_SELECT, "id": f"eq.{request_id}"},
            access_token=access_token,
        )
        if not rows:
            logger.warning("Connection request not found", request_id=request_id)
            raise ConnectionRequestNotFoundError(request_id=request_id)
        return self._parse_requests(rows[:1])[0]

    def update_connection_request_status(
        self,
        request_id: str,
        status: ConnectionRequestStatus,
        access_token: str | None = None,
        expected_status: ConnectionRequestStatus = ConnectionRequestStatus.PENDING,
    ) -> ConnectionRequest | None:
        """Write a new status, only if the row still has ``expected_status``.

        The status filter makes the write a compare-and-set: when two callers
        resolve the same request, only the first one updates a row.

        Args:
            request_id: ID of the connection request
            status: New status to write
            access_token: Viewer session token
            expected_status: Status the row must currently have

        Returns:
            The updated request, or None if no row matched

        Raises:
            UpdateError: If the backend call fails
        """
        url = f"{self.base_url}/connection_requests"
        params = {
            "id": f"eq.{request_id}",
            "status": f"eq.{expected_status.value}",
            "select": REQUEST_IDENTITY_SELECT,
        }

        logger.info(
            "Updating connection request status",
            request_id=request_id,
            status=status.value,
            expected_status=expected_status.value,
        )

        try:
            response = self._make_request(
                "PATCH",
                url,
                params=params,
                json_data={"status": status.value},
                access_token=access_token,
                headers={"Prefer": "return=representation"},
            )
        except (BackendServiceError, requests.RequestException) as e:
            logger.error(
                "Failed to update connection request status",
                request_id=request_id,
                status=status.value,
                error=str(e),
            )
            raise UpdateError(
                request_id=request_id,
                service_name=self.service_name,
                status_code=getattr(e, "status_code", None),
            ) from e

        if response.status_code == 404:
            raise UpdateError(
                request_id=request_id,
                service_name=self.service_name,
                status_code=404,
            )

        try:
            rows = response.json() if response.content else []
        except ValueError as e:
            logger.error(
                "Status write returned a body that is not JSON",
                request_id=request_id,
                error=str(e),
            )
            raise UpdateError(
                request_id=request_id,
                service_name=self.service_name,
                status_code=response.status_code,
            ) from e

        if not rows:
            logger.info(
                "No connection request matched the status filter",
                request_id=request_id,
                expected_status=expected_status.value,
            )
            return None
        return self._parse_requests(rows[:1])[0]

    def _fetch_rows(
        self,
        resource: str,
        params: dict[str, Any],
        access_token: str | None,
    ) -> list[dict[str, Any]]:
        url = f"{self.base_url}/{resource}"
        try:
            response = self._make_request(
                "GET", url, params=params, access_token=access_token
            )
        except (BackendServiceError, requests.RequestException) as e:
            logger.error("Failed to fetch rows", resource=resource, error=str(e))
            raise FetchError(
                resource,
                service_name=self.service_name,
                status_code=getattr(e, "status_code", None),
            ) from e

        if response.status_code == 404:
            raise FetchError(resource, service_name=self.service_name, status_code=404)

        try:
            rows = response.json()
        except ValueError as e:
            logger.error("Backend returned a body that is not JSON", resource=resource)
            raise FetchError(
                resource,
                message=f"Backend returned malformed {resource} rows",
                service_name=self.service_name,
                status_code=response.status_code,
            ) from e

        logger.debug("Fetched rows", resource=resource, row_count=len(rows))
        return rows

    def _parse_requests(self, rows: list[dict[str, Any]]) -> list[ConnectionRequest]:
        try:
            return [ConnectionRequest.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(
                "Failed to validate connection request rows",
                validation_errors=e.errors(),
            )
            raise FetchError(
                "connection_requests",
                message="Backend returned malformed connection request rows",
                service_name=self.service_name,
            ) from e


# Global client instance
backend_client = BackendClient()
