"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.notification import (
    DISPLAY_CATEGORIES,
    ConnectionRequestStatus,
    NotificationCategory,
)

__all__ = [
    "DISPLAY_CATEGORIES",
    "ConnectionRequestStatus",
    "HealthStatus",
    "NotificationCategory",
]
