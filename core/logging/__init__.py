"""Logging utilities for the campus feed service."""

from core.logging.config import cleanup_old_logs, setup_logging
from core.logging.context import (
    clear_request_id,
    get_request_id,
    request_id_scope,
    set_request_id,
)

__all__ = [
    "cleanup_old_logs",
    "clear_request_id",
    "get_request_id",
    "request_id_scope",
    "set_request_id",
    "setup_logging",
]
