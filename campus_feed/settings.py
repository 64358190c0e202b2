"""Django settings for the campus feed service.

All deployment-specific values come from environment variables so the same
image runs against any hosted backend project.
"""

import os
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes", "on")


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-campus-feed-dev-key")

DEBUG = _env_bool("DEBUG", False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "campus_feed.urls"

WSGI_APPLICATION = "campus_feed.wsgi.application"
ASGI_APPLICATION = "campus_feed.asgi.application"

# The service owns no schema; all data lives in the hosted backend.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "campus-feed",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Django's own logging setup is replaced by core.logging.setup_logging()
LOGGING_CONFIG = None
STRUCTURED_LOGGING_ENABLED = True

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.auth.backend_session.BackendSessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# Hosted backend
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:54321")
BACKEND_ANON_KEY = os.getenv("BACKEND_ANON_KEY", "")
BACKEND_REALTIME_URL = os.getenv("BACKEND_REALTIME_URL", "")
BACKEND_REQUEST_TIMEOUT_SECONDS = float(
    os.getenv("BACKEND_REQUEST_TIMEOUT_SECONDS", "10")
)

# Viewer session validation
BACKEND_JWT_SECRET = os.getenv("BACKEND_JWT_SECRET", "")
BACKEND_JWT_AUDIENCE = os.getenv("BACKEND_JWT_AUDIENCE", "authenticated")
AUTH_INTROSPECTION_ENABLED = _env_bool("AUTH_INTROSPECTION_ENABLED", False)
AUTH_TOKEN_CACHE_PREFIX = "campus_feed:session:"
AUTH_TOKEN_CACHE_TTL = int(os.getenv("AUTH_TOKEN_CACHE_TTL", "60"))

# Realtime change feed
REALTIME_HEARTBEAT_SECONDS = float(os.getenv("REALTIME_HEARTBEAT_SECONDS", "30"))
