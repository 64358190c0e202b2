"""Component tests for the health probe endpoints."""

from unittest.mock import patch

from django.test import Client, SimpleTestCase

import responses

from core.services.health_service import HealthService

REST_ROOT_URL = "http://backend.test/rest/v1/"


class TestHealthEndpoints(SimpleTestCase):
    """Component tests for /health/live and /health/ready."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.live_url = "/api/v1/campus-feed/health/live"
        self.ready_url = "/api/v1/campus-feed/health/ready"

    def test_liveness_needs_no_token(self):
        """Test the liveness probe without authentication."""
        response = self.client.get(self.live_url)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "alive"})

    @responses.activate
    @patch("core.views.health_service", HealthService(cache_ttl_seconds=0.0))
    def test_readiness_with_reachable_backend(self):
        """Test the readiness probe when the backend answers."""
        responses.add(responses.GET, REST_ROOT_URL, json={}, status=200)

        response = self.client.get(self.ready_url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ready")
        self.assertEqual(data["dependencies"]["backend"]["status"], "healthy")

    @responses.activate
    @patch("core.views.health_service", HealthService(cache_ttl_seconds=0.0))
    def test_readiness_degraded_with_failing_backend(self):
        """Test that a failing backend degrades but does not fail readiness."""
        responses.add(responses.GET, REST_ROOT_URL, status=503)

        response = self.client.get(self.ready_url)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["ready"])
        self.assertTrue(data["degraded"])
        self.assertEqual(data["dependencies"]["backend"]["status"], "unhealthy")
