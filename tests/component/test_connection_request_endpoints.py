"""Component tests for the connection request accept and reject endpoints."""

from django.test import Client, SimpleTestCase

import responses
from responses import matchers

from core.constants import CONNECTION_FAILED_MESSAGE
from tests.factories import connection_request_row, session_token

REQUESTS_URL = "http://backend.test/rest/v1/connection_requests"
NOTIFICATIONS_URL = "http://backend.test/rest/v1/notifications"
PROCEDURE_URL = "http://backend.test/rest/v1/rpc/create_connection"
VIEWER_ID = "viewer-1"
REQUESTER_ID = "requester-1"
REQUEST_ID = "req-1"


class TestConnectionRequestEndpoints(SimpleTestCase):
    """Component tests for POST /connection-requests/<id>/accept|reject."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.accept_url = f"/api/v1/campus-feed/connection-requests/{REQUEST_ID}/accept"
        self.reject_url = f"/api/v1/campus-feed/connection-requests/{REQUEST_ID}/reject"
        self.headers = {"HTTP_AUTHORIZATION": f"Bearer {session_token(VIEWER_ID)}"}

    def _row(self, status="pending", **overrides):
        fields = {
            "id": REQUEST_ID,
            "recipient_id": VIEWER_ID,
            "requester_id": REQUESTER_ID,
            "status": status,
        }
        fields.update(overrides)
        row = connection_request_row(**fields)
        del row["requester"]
        return row

    def _mock_read(self, rows):
        responses.add(
            responses.GET,
            REQUESTS_URL,
            json=rows,
            status=200,
            match=[
                matchers.query_param_matcher(
                    {"id": f"eq.{REQUEST_ID}"}, strict_match=False
                )
            ],
        )

    def _mock_write(self, status, rows):
        responses.add(
            responses.PATCH,
            REQUESTS_URL,
            json=rows,
            status=200,
            match=[
                matchers.query_param_matcher(
                    {"id": f"eq.{REQUEST_ID}", "status": "eq.pending"},
                    strict_match=False,
                ),
                matchers.json_params_matcher({"status": status}),
            ],
        )

    def _mock_refresh(self, pending=()):
        responses.add(responses.GET, NOTIFICATIONS_URL, json=[], status=200)
        responses.add(
            responses.GET,
            REQUESTS_URL,
            json=list(pending),
            status=200,
            match=[
                matchers.query_param_matcher(
                    {"recipient_id": f"eq.{VIEWER_ID}"}, strict_match=False
                )
            ],
        )

    @responses.activate
    def test_accept_creates_connection(self):
        """Test accepting a pending request end to end."""
        self._mock_read([self._row()])
        self._mock_write("accepted", [self._row(status="accepted")])
        responses.add(
            responses.POST,
            PROCEDURE_URL,
            status=204,
            match=[
                matchers.json_params_matcher(
                    {"follower": REQUESTER_ID, "following": VIEWER_ID}
                )
            ],
        )
        self._mock_refresh()

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["request_id"], REQUEST_ID)
        self.assertEqual(data["status"], "accepted")
        self.assertTrue(data["connection_created"])
        self.assertEqual(data["feed"], [])
        self.assertEqual(
            [call.request.method for call in responses.calls],
            ["GET", "PATCH", "GET", "POST", "GET", "GET"],
        )

    @responses.activate
    def test_accept_succeeds_when_feed_reload_fails(self):
        """Test that a completed acceptance is reported even if the feed is down."""
        self._mock_read([self._row()])
        self._mock_write("accepted", [self._row(status="accepted")])
        responses.add(responses.POST, PROCEDURE_URL, status=204)
        responses.add(responses.GET, NOTIFICATIONS_URL, status=503)

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "accepted")
        self.assertTrue(data["connection_created"])
        self.assertIsNone(data["feed"])
        self.assertFalse(data["feed_refreshed"])

    @responses.activate
    def test_reject_does_not_create_connection(self):
        """Test rejecting a pending request end to end."""
        self._mock_read([self._row()])
        self._mock_write("rejected", [self._row(status="rejected")])
        self._mock_refresh()

        response = self.client.post(self.reject_url, **self.headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "rejected")
        self.assertFalse(data["connection_created"])
        self.assertNotIn(
            PROCEDURE_URL, [call.request.url for call in responses.calls]
        )

    @responses.activate
    def test_procedure_failure_returns_502(self):
        """Test that a failed connection creation is reported."""
        self._mock_read([self._row()])
        self._mock_write("accepted", [self._row(status="accepted")])
        responses.add(
            responses.POST, PROCEDURE_URL, json={"message": "boom"}, status=500
        )

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["message"], CONNECTION_FAILED_MESSAGE)

    @responses.activate
    def test_status_write_failure_returns_502_without_procedure(self):
        """Test that a failed status write aborts the acceptance."""
        self._mock_read([self._row()])
        responses.add(responses.PATCH, REQUESTS_URL, status=503)

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["message"], CONNECTION_FAILED_MESSAGE)
        self.assertEqual(
            [call.request.method for call in responses.calls], ["GET", "PATCH"]
        )

    @responses.activate
    def test_resolved_request_returns_409(self):
        """Test that a request that already left pending is a conflict."""
        self._mock_read([self._row(status="accepted")])

        response = self.client.post(self.reject_url, **self.headers)

        self.assertEqual(response.status_code, 409)
        data = response.json()
        self.assertEqual(data["error"], "conflict")
        self.assertEqual(data["detail"], "Request is already accepted")

    @responses.activate
    def test_lost_race_returns_409(self):
        """Test that a concurrent resolution is reported as a conflict."""
        self._mock_read([self._row()])
        self._mock_write("accepted", [])

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 409)

    @responses.activate
    def test_unknown_request_returns_404(self):
        """Test resolving a request that is not visible."""
        self._mock_read([])

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 404)

    @responses.activate
    def test_other_users_request_returns_403(self):
        """Test that only the recipient may resolve a request."""
        self._mock_read([self._row(recipient_id="someone-else")])

        response = self.client.post(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 403)

    def test_missing_token_returns_401(self):
        """Test that resolving requires a session."""
        response = self.client.post(self.accept_url)

        self.assertEqual(response.status_code, 401)

    def test_get_not_allowed(self):
        """Test that only POST is accepted."""
        response = self.client.get(self.accept_url, **self.headers)

        self.assertEqual(response.status_code, 405)
