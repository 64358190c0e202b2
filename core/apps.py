"""Django application configuration for core."""

import logging

from django.apps import AppConfig
from django.conf import settings

from core.logging import setup_logging

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self) -> None:
        """Configure structured logging once Django is ready."""
        if getattr(settings, "STRUCTURED_LOGGING_ENABLED", True):
            setup_logging()
        logger.info("Campus feed core app ready", extra={"backend": settings.BACKEND_URL})
