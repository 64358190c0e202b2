"""ASGI config for the campus feed service."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campus_feed.settings")

application = get_asgi_application()
