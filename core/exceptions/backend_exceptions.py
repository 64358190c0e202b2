"""Custom exceptions for hosted backend communication."""


class BackendServiceError(Exception):
    """Base exception for hosted backend errors."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        status_code: int | None = None,
    ):
        """Initialize backend service error.

        Args:
            message: Error message
            service_name: Name of the backend API that failed
            status_code: HTTP status code if applicable
        """
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message)


class BackendServiceUnavailableError(BackendServiceError):
    """Hosted backend is unavailable (500/503 errors)."""

    def __init__(self, service_name: str, status_code: int, message: str | None = None):
        """Initialize service unavailable error.

        Args:
            service_name: Name of the backend API
            status_code: HTTP status code (500, 503, etc.)
            message: Optional custom error message
        """
        default_message = (
            f"{service_name} service is unavailable (status: {status_code})"
        )
        super().__init__(
            message=message or default_message,
            service_name=service_name,
            status_code=status_code,
        )


class FetchError(BackendServiceError):
    """Reading rows from the hosted backend failed."""

    def __init__(self, resource: str, message: str | None = None, **kwargs):
        """Initialize fetch error.

        Args:
            resource: Table or view that could not be read
            message: Optional custom error message
            **kwargs: service_name / status_code passed to the base class
        """
        self.resource = resource
        super().__init__(message=message or f"Failed to fetch {resource}", **kwargs)


class ConnectionRequestNotFoundError(FetchError):
    """Connection request does not exist or is not visible to the caller."""

    def __init__(self, request_id: str):
        """Initialize connection request not found error.

        Args:
            request_id: ID of the connection request that was not found
        """
        self.request_id = request_id
        super().__init__(
            resource="connection_requests",
            message=f"Connection request {request_id} not found",
            status_code=404,
        )


class UpdateError(BackendServiceError):
    """Writing a connection request status failed."""

    def __init__(self, request_id: str, message: str | None = None, **kwargs):
        """Initialize update error.

        Args:
            request_id: ID of the connection request being updated
            message: Optional custom error message
            **kwargs: service_name / status_code passed to the base class
        """
        self.request_id = request_id
        super().__init__(
            message=message or f"Failed to update connection request {request_id}",
            **kwargs,
        )


class ConnectionCreationError(BackendServiceError):
    """The privileged create_connection procedure failed.

    The connection request is left accepted without a materialized
    connection when this is raised after a successful status write.
    """

    def __init__(
        self, follower_id: str, following_id: str, message: str | None = None, **kwargs
    ):
        """Initialize connection creation error.

        Args:
            follower_id: Requester identity passed to the procedure
            following_id: Recipient identity passed to the procedure
            message: Optional custom error message
            **kwargs: service_name / status_code passed to the base class
        """
        self.follower_id = follower_id
        self.following_id = following_id
        super().__init__(
            message=message
            or f"Failed to create connection between {follower_id} and {following_id}",
            **kwargs,
        )


class RequestAlreadyResolvedError(Exception):
    """A transition was attempted on a connection request that left pending (409)."""

    def __init__(self, request_id: str, status: str | None = None):
        """Initialize already resolved error.

        Args:
            request_id: ID of the connection request
            status: Current terminal status, if known
        """
        self.request_id = request_id
        self.status = status
        self.detail = (
            f"Request is already {status}" if status else "Request is no longer pending"
        )
        super().__init__(f"Connection request {request_id} has already been resolved")
