"""Client for the backend's privileged create_connection procedure."""

import requests
import structlog

from core.config.backend import get_rest_url
from core.exceptions import BackendServiceError, ConnectionCreationError
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)

CREATE_CONNECTION_PROCEDURE = "create_connection"


class ConnectionProcedureClient(BaseDownstreamClient):
    """Trusted boundary for materializing connections.

    Connection rows cannot be written by an ordinary session: the access
    policy on the connections table rejects direct inserts. The backend
    exposes ``create_connection`` which runs with elevated rights and inserts
    both directions of the connection in one transaction. This client is the
    only code path that calls it.
    """

    def __init__(self, base_url: str | None = None):
        """Initialize connection procedure client."""
        super().__init__(service_name="backend-rpc", base_url=base_url)

    def _default_base_url(self) -> str:
        return f"{get_rest_url()}/rpc"

    def create_connection(
        self,
        follower_id: str,
        following_id: str,
        access_token: str | None = None,
    ) -> None:
        """Materialize a bidirectional connection between two users.

        Args:
            follower_id: ID of the user who sent the connection request
            following_id: ID of the user who accepted it
            access_token: Session token of the accepting user

        Raises:
            ConnectionCreationError: If the procedure call fails
        """
        url = f"{self.base_url}/{CREATE_CONNECTION_PROCEDURE}"

        logger.info(
            "Creating connection",
            follower_id=follower_id,
            following_id=following_id,
        )

        try:
            response = self._make_request(
                "POST",
                url,
                json_data={"follower": follower_id, "following": following_id},
                access_token=access_token,
            )
        except (BackendServiceError, requests.RequestException) as e:
            logger.error(
                "Create connection procedure failed",
                follower_id=follower_id,
                following_id=following_id,
                error=str(e),
            )
            raise ConnectionCreationError(
                follower_id=follower_id,
                following_id=following_id,
                service_name=self.service_name,
                status_code=getattr(e, "status_code", None),
            ) from e

        if response.status_code == 404:
            logger.error(
                "Create connection procedure is not deployed",
                procedure=CREATE_CONNECTION_PROCEDURE,
            )
            raise ConnectionCreationError(
                follower_id=follower_id,
                following_id=following_id,
                message=f"Procedure {CREATE_CONNECTION_PROCEDURE} not found",
                service_name=self.service_name,
                status_code=404,
            )

        logger.info(
            "Connection created",
            follower_id=follower_id,
            following_id=following_id,
        )


# Global client instance
connection_procedure_client = ConnectionProcedureClient()
