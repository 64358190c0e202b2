"""Hosted backend clients package."""

from core.services.downstream.backend_client import BackendClient, backend_client
from core.services.downstream.connection_procedure_client import (
    ConnectionProcedureClient,
    connection_procedure_client,
)

__all__ = [
    "BackendClient",
    "ConnectionProcedureClient",
    "backend_client",
    "connection_procedure_client",
]
