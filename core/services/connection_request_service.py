"""Service for accepting and rejecting connection requests.

A connection request moves exactly once from ``pending`` to ``accepted`` or
``rejected``. Accepting additionally materializes a bidirectional connection
through the backend's privileged ``create_connection`` procedure.

The steps of an acceptance run strictly in order: status write, identity
re-read, procedure call. When the procedure fails the request stays
``accepted`` without a connection; that state is reported to the caller as
a ConnectionCreationError and is not repaired here.
"""

import structlog
from rest_framework.exceptions import PermissionDenied

from core.constants import CONNECTION_ACCEPTED_MESSAGE, CONNECTION_REJECTED_MESSAGE
from core.enums import ConnectionRequestStatus
from core.exceptions import (
    BackendServiceError,
    ConnectionCreationError,
    RequestAlreadyResolvedError,
)
from core.schemas.connection import ConnectionRequest, ConnectionRequestResolution
from core.services.downstream import (
    BackendClient,
    ConnectionProcedureClient,
    backend_client,
    connection_procedure_client,
)
from core.services.notification_feed_service import (
    NotificationFeedService,
    notification_feed_service,
)

logger = structlog.get_logger(__name__)


class ConnectionRequestService:
    """Resolver for the connection request state machine."""

    def __init__(
        self,
        client: BackendClient | None = None,
        procedure_client: ConnectionProcedureClient | None = None,
        feed_service: NotificationFeedService | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Backend client for connection request rows
            procedure_client: Trusted client for create_connection
            feed_service: Feed service used to refresh after resolving
        """
        self.client = client or backend_client
        self.procedure_client = procedure_client or connection_procedure_client
        self.feed_service = feed_service or notification_feed_service

    def resolve(
        self,
        request_id: str,
        accept: bool,
        user_id: str,
        access_token: str | None = None,
    ) -> ConnectionRequestResolution:
        """Accept or reject a pending connection request.

        Args:
            request_id: ID of the connection request
            accept: True to accept, False to reject
            user_id: ID of the viewer resolving the request
            access_token: Viewer session token forwarded to the backend

        Returns:
            ConnectionRequestResolution with the refreshed feed, or with
            ``feed_refreshed`` False when the feed could not be re-read

        Raises:
            ConnectionRequestNotFoundError: If the request does not exist
            PermissionDenied: If the viewer is not the request's recipient
            RequestAlreadyResolvedError: If the request already left pending,
                including when a concurrent caller resolved it first
            UpdateError: If the status write fails
            FetchError: If re-reading the accepted request fails
            ConnectionCreationError: If the procedure fails after the
                request was marked accepted
        """
        target = (
            ConnectionRequestStatus.ACCEPTED if accept else ConnectionRequestStatus.REJECTED
        )

        logger.info(
            "Resolving connection request",
            request_id=request_id,
            user_id=user_id,
            target_status=target.value,
        )

        current = self.client.get_connection_request(
            request_id, access_token=access_token
        )
        self._check_transition(current, target, user_id)

        updated = self.client.update_connection_request_status(
            request_id, target, access_token=access_token
        )
        if updated is None:
            # Another caller moved the request out of pending between our
            # read and our write.
            logger.warning(
                "Connection request resolved concurrently",
                request_id=request_id,
                target_status=target.value,
            )
            raise RequestAlreadyResolvedError(request_id=request_id)

        connection_created = False
        if accept:
            self._create_connection(request_id, access_token)
            connection_created = True
            message = CONNECTION_ACCEPTED_MESSAGE
        else:
            message = CONNECTION_REJECTED_MESSAGE

        logger.info(
            "Connection request resolved",
            request_id=request_id,
            status=target.value,
            connection_created=connection_created,
        )

        # The resolution is already committed; a failed re-read must not
        # turn it into an error the caller cannot retry.
        try:
            feed = self.feed_service.refresh(user_id, access_token=access_token)
        except BackendServiceError as e:
            logger.warning(
                "Feed refresh after resolution failed",
                request_id=request_id,
                user_id=user_id,
                error=str(e),
            )
            feed = None

        return ConnectionRequestResolution(
            request_id=request_id,
            status=target,
            connection_created=connection_created,
            message=message,
            feed=feed,
            feed_refreshed=feed is not None,
        )

    def accept(
        self, request_id: str, user_id: str, access_token: str | None = None
    ) -> ConnectionRequestResolution:
        """Accept a pending connection request. See resolve()."""
        return self.resolve(request_id, True, user_id, access_token=access_token)

    def reject(
        self, request_id: str, user_id: str, access_token: str | None = None
    ) -> ConnectionRequestResolution:
        """Reject a pending connection request. See resolve()."""
        return self.resolve(request_id, False, user_id, access_token=access_token)

    def _check_transition(
        self,
        request: ConnectionRequest,
        target: ConnectionRequestStatus,
        user_id: str,
    ) -> None:
        if request.recipient_id is not None and request.recipient_id != user_id:
            logger.warning(
                "User is not the recipient of the connection request",
                request_id=request.id,
                user_id=user_id,
            )
            raise PermissionDenied(
                "Only the recipient can resolve a connection request"
            )

        if not request.status.can_transition_to(target):
            logger.warning(
                "Connection request is no longer pending",
                request_id=request.id,
                status=request.status.value,
                target_status=target.value,
            )
            raise RequestAlreadyResolvedError(
                request_id=request.id, status=request.status.value
            )

    def _create_connection(self, request_id: str, access_token: str | None) -> None:
        # Identities are re-read after the status write; the row may have
        # been deleted in between.
        accepted = self.client.get_connection_request(
            request_id, access_token=access_token
        )

        try:
            self.procedure_client.create_connection(
                follower_id=accepted.requester_id,
                following_id=accepted.recipient_id,
                access_token=access_token,
            )
        except ConnectionCreationError:
            logger.error(
                "Connection request accepted without a connection",
                request_id=request_id,
                requester_id=accepted.requester_id,
                recipient_id=accepted.recipient_id,
            )
            raise


# Global service instance
connection_request_service = ConnectionRequestService()
