"""Middleware components for the campus feed service."""

from core.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
