"""Exception handling utilities for the campus feed service."""

from core.exceptions.backend_exceptions import (
    BackendServiceError,
    BackendServiceUnavailableError,
    ConnectionCreationError,
    ConnectionRequestNotFoundError,
    FetchError,
    RequestAlreadyResolvedError,
    UpdateError,
)
from core.exceptions.handlers import custom_exception_handler

__all__ = [
    "BackendServiceError",
    "BackendServiceUnavailableError",
    "ConnectionCreationError",
    "ConnectionRequestNotFoundError",
    "FetchError",
    "RequestAlreadyResolvedError",
    "UpdateError",
    "custom_exception_handler",
]
