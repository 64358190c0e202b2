"""Connection request response schemas."""

from core.schemas.connection.response.connection_request_resolution import (
    ConnectionRequestResolution,
)

__all__ = ["ConnectionRequestResolution"]
