"""WSGI config for the campus feed service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campus_feed.settings")

application = get_wsgi_application()
