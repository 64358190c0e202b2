"""Server-sent event stream of a viewer's notification feed.

The stream owns one change feed subscription for as long as the client
stays connected. It emits the feed once on connect and again after every
change event, coalescing bursts of events into a single refresh.
"""

import json
import queue
from collections.abc import Callable, Iterator
from typing import Any

import structlog

from core.constants import FEED_FAILED_MESSAGE
from core.exceptions import BackendServiceError
from core.logging.context import get_request_id, request_id_scope
from core.services.notification_feed_service import (
    NotificationFeedService,
    notification_feed_service,
)
from core.services.realtime.change_feed import ChangeFeedSubscription

logger = structlog.get_logger(__name__)

KEEPALIVE_SECONDS = 15.0
_CHANGED = object()


def format_event(event: str, data: str) -> str:
    """Format one server-sent event frame."""
    return f"event: {event}\ndata: {data}\n\n"


class FeedStream:
    """Iterable of SSE frames bound to one viewer session.

    Closing the iterator (which Django does when the client disconnects)
    closes the underlying subscription.
    """

    def __init__(
        self,
        user_id: str,
        access_token: str | None = None,
        feed_service: NotificationFeedService | None = None,
        subscription_factory: Callable[..., ChangeFeedSubscription] = (
            ChangeFeedSubscription
        ),
        keepalive_seconds: float = KEEPALIVE_SECONDS,
    ) -> None:
        self.user_id = user_id
        self.access_token = access_token
        self.feed_service = feed_service or notification_feed_service
        self.subscription_factory = subscription_factory
        self.keepalive_seconds = keepalive_seconds
        self._changes: queue.Queue[Any] = queue.Queue()
        # The request ID is cleared before a streaming body is iterated
        self._request_id = get_request_id()

    def _on_change(self) -> None:
        self._changes.put(_CHANGED)

    def _feed_frame(self) -> str:
        try:
            feed = self.feed_service.get_feed(
                self.user_id, access_token=self.access_token
            )
        except BackendServiceError as e:
            logger.warning(
                "Feed refresh failed during stream",
                user_id=self.user_id,
                error=str(e),
            )
            return format_event("error", json.dumps({"message": FEED_FAILED_MESSAGE}))
        return format_event("feed", feed.model_dump_json())

    def _drain(self) -> None:
        while True:
            try:
                self._changes.get_nowait()
            except queue.Empty:
                return

    def __iter__(self) -> Iterator[str]:
        with request_id_scope(self._request_id):
            subscription = self.subscription_factory(
                self.user_id,
                self._on_change,
                access_token=self.access_token,
            )
            try:
                subscription.start()
                yield self._feed_frame()
                while True:
                    try:
                        self._changes.get(timeout=self.keepalive_seconds)
                    except queue.Empty:
                        yield ": keep-alive\n\n"
                        continue
                    self._drain()
                    yield self._feed_frame()
            finally:
                subscription.close()
