"""Realtime change feed support."""

from core.services.realtime.change_feed import DEFAULT_TABLES, ChangeFeedSubscription
from core.services.realtime.feed_stream import FeedStream, format_event

__all__ = ["DEFAULT_TABLES", "ChangeFeedSubscription", "FeedStream", "format_event"]
