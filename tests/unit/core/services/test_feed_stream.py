"""Unit tests for the server-sent event feed stream."""

import json
import unittest
from unittest.mock import Mock

from core.constants import FEED_FAILED_MESSAGE
from core.exceptions import FetchError
from core.logging.context import clear_request_id, get_request_id, set_request_id
from core.schemas.notification import NotificationFeedResponse
from core.services.realtime.feed_stream import FeedStream, format_event


class FakeSubscription:
    """Subscription stand-in that records its lifecycle."""

    instances = []

    def __init__(self, user_id, refresh, access_token=None):
        self.user_id = user_id
        self.refresh = refresh
        self.access_token = access_token
        self.started = False
        self.closed = False
        self.request_id_at_start = None
        FakeSubscription.instances.append(self)

    def start(self):
        self.started = True
        self.request_id_at_start = get_request_id()
        return self

    def close(self):
        self.closed = True


class FailingSubscription(FakeSubscription):
    """Subscription whose channel join fails after the socket opened."""

    def start(self):
        raise OSError("join failed")


def _feed(count=0):
    return NotificationFeedResponse(
        notifications=[], buckets={}, count=count, uncategorized_count=0
    )


class TestFormatEvent(unittest.TestCase):
    """Test cases for SSE frame formatting."""

    def test_format_event(self):
        """Test the frame layout."""
        self.assertEqual(format_event("feed", "{}"), "event: feed\ndata: {}\n\n")


class TestFeedStream(unittest.TestCase):
    """Test cases for FeedStream."""

    def setUp(self):
        """Set up test fixtures."""
        FakeSubscription.instances = []
        self.feed_service = Mock()
        self.feed_service.get_feed.side_effect = [_feed(1), _feed(2), _feed(3)]

    def tearDown(self):
        """Clean up thread-local state."""
        clear_request_id()

    def _stream(self, keepalive_seconds=5.0):
        return FeedStream(
            "viewer-1",
            access_token="user-token",
            feed_service=self.feed_service,
            subscription_factory=FakeSubscription,
            keepalive_seconds=keepalive_seconds,
        )

    def test_first_frame_is_current_feed(self):
        """Test that the stream opens with the feed and a live subscription."""
        frames = iter(self._stream())

        first = next(frames)

        subscription = FakeSubscription.instances[0]
        self.assertTrue(subscription.started)
        self.assertEqual(subscription.user_id, "viewer-1")
        self.assertEqual(subscription.access_token, "user-token")
        self.assertTrue(first.startswith("event: feed\ndata: "))
        self.assertEqual(json.loads(first.split("data: ", 1)[1])["count"], 1)
        frames.close()

    def test_change_emits_refreshed_feed(self):
        """Test that a change event produces a new feed frame."""
        frames = iter(self._stream())
        next(frames)

        FakeSubscription.instances[0].refresh()
        second = next(frames)

        self.assertEqual(json.loads(second.split("data: ", 1)[1])["count"], 2)
        self.feed_service.get_feed.assert_called_with("viewer-1", access_token="user-token")
        frames.close()

    def test_bursts_of_changes_are_coalesced(self):
        """Test that queued changes produce a single refresh."""
        frames = iter(self._stream())
        next(frames)

        for _ in range(3):
            FakeSubscription.instances[0].refresh()
        next(frames)

        self.assertEqual(self.feed_service.get_feed.call_count, 2)
        frames.close()

    def test_idle_stream_sends_keepalive(self):
        """Test the keep-alive comment when nothing changes."""
        frames = iter(self._stream(keepalive_seconds=0.01))
        next(frames)

        self.assertEqual(next(frames), ": keep-alive\n\n")
        frames.close()

    def test_closing_stream_closes_subscription(self):
        """Test that client disconnect releases the subscription."""
        frames = iter(self._stream())
        next(frames)

        frames.close()

        self.assertTrue(FakeSubscription.instances[0].closed)

    def test_failed_start_closes_subscription(self):
        """Test that a subscription that fails to start is still closed."""
        stream = FeedStream(
            "viewer-1",
            access_token="user-token",
            feed_service=self.feed_service,
            subscription_factory=FailingSubscription,
        )

        with self.assertRaises(OSError):
            next(iter(stream))

        self.assertTrue(FakeSubscription.instances[0].closed)
        self.feed_service.get_feed.assert_not_called()

    def test_backend_failure_emits_error_frame(self):
        """Test that a failed refresh yields an error event and keeps streaming."""
        self.feed_service.get_feed.side_effect = [
            FetchError("notifications"),
            _feed(4),
        ]
        frames = iter(self._stream())

        first = next(frames)
        FakeSubscription.instances[0].refresh()
        second = next(frames)

        self.assertEqual(
            first, format_event("error", json.dumps({"message": FEED_FAILED_MESSAGE}))
        )
        self.assertTrue(second.startswith("event: feed\n"))
        frames.close()

    def test_request_id_survives_into_stream_body(self):
        """Test that the opening request's ID is bound while streaming."""
        set_request_id("req-abc")
        stream = self._stream()
        clear_request_id()

        frames = iter(stream)
        next(frames)

        self.assertEqual(FakeSubscription.instances[0].request_id_at_start, "req-abc")
        frames.close()
        self.assertIsNone(get_request_id())


if __name__ == "__main__":
    unittest.main()
