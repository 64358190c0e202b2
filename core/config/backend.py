"""Hosted backend connection configuration.

Values are read from Django settings so tests can override them with
``override_settings``. Defaults point at a local backend stack.
"""

from django.conf import settings


def get_backend_url() -> str:
    """Return the base URL of the hosted backend, without a trailing slash."""
    return str(settings.BACKEND_URL).rstrip("/")


def get_rest_url() -> str:
    """Return the base URL of the backend's row-level REST API."""
    return f"{get_backend_url()}/rest/v1"


def get_auth_url() -> str:
    """Return the base URL of the backend's auth API."""
    return f"{get_backend_url()}/auth/v1"


def get_realtime_url() -> str:
    """Return the websocket URL of the backend's realtime change feed.

    Falls back to deriving it from BACKEND_URL when BACKEND_REALTIME_URL
    is not configured.
    """
    if settings.BACKEND_REALTIME_URL:
        return str(settings.BACKEND_REALTIME_URL)

    base = get_backend_url()
    if base.startswith("https://"):
        base = "wss://" + base.removeprefix("https://")
    elif base.startswith("http://"):
        base = "ws://" + base.removeprefix("http://")
    return f"{base}/realtime/v1/websocket"


def get_anon_key() -> str:
    """Return the public API key sent with every backend call."""
    return str(settings.BACKEND_ANON_KEY)


def get_request_timeout() -> float:
    """Return the timeout in seconds applied to every backend HTTP call."""
    return float(settings.BACKEND_REQUEST_TIMEOUT_SECONDS)
