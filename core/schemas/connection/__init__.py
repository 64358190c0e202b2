"""Connection request schemas."""

from core.schemas.connection.connection_request import ConnectionRequest
from core.schemas.connection.response import ConnectionRequestResolution

__all__ = ["ConnectionRequest", "ConnectionRequestResolution"]
