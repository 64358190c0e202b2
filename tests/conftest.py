"""Pytest configuration and shared fixtures."""

import logging
import os

import django
from django.test import Client

import pytest
import structlog

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campus_feed.settings_test")
django.setup()

# Only CRITICAL events reach the console during tests
structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
)
logging.getLogger().setLevel(logging.CRITICAL)


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()
