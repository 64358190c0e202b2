"""Component tests for the notification feed stream endpoint."""

from unittest.mock import patch

from django.test import Client, SimpleTestCase

from tests.factories import session_token

VIEWER_ID = "viewer-1"


class FakeFeedStream:
    """Feed stream stand-in yielding a fixed frame."""

    opened = []

    def __init__(self, user_id, access_token=None):
        FakeFeedStream.opened.append((user_id, access_token))

    def __iter__(self):
        yield "event: feed\ndata: {}\n\n"


class TestNotificationStreamEndpoint(SimpleTestCase):
    """Component tests for GET /users/me/notifications/stream."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.url = "/api/v1/campus-feed/users/me/notifications/stream"
        FakeFeedStream.opened = []

    @patch("core.views.FeedStream", FakeFeedStream)
    def test_stream_opens_for_viewer(self):
        """Test that a viewer receives an event stream bound to their session."""
        token = session_token(VIEWER_ID)

        response = self.client.get(self.url, HTTP_AUTHORIZATION=f"Bearer {token}")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.streaming)
        self.assertEqual(response["Content-Type"], "text/event-stream")
        self.assertEqual(response["Cache-Control"], "no-cache")
        self.assertEqual(
            b"".join(response.streaming_content), b"event: feed\ndata: {}\n\n"
        )
        self.assertEqual(FakeFeedStream.opened, [(VIEWER_ID, token)])

    @patch("core.views.FeedStream", FakeFeedStream)
    def test_stream_requires_session(self):
        """Test that an anonymous client cannot open the stream."""
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(FakeFeedStream.opened, [])
