"""Subscription to the hosted backend's realtime change feed.

The backend publishes row changes over a Phoenix-channel websocket. A
subscription joins one channel listening to every change on a set of
tables and calls a refresh callback for each change event. The payload
of an event is never inspected: a change of any kind means "re-fetch".

Subscriptions are explicit resources. Open one when a viewer session
starts and close it when the session ends; an unclosed subscription keeps
its socket and reader thread alive for the lifetime of the process.
Dropped connections are not re-established.
"""

import itertools
import json
import threading
import time
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import urlencode

import structlog
from django.conf import settings
from websockets.exceptions import ConnectionClosed
from websockets.sync.client import connect as websocket_connect

from core.config.backend import get_anon_key, get_realtime_url
from core.constants import NOTIFICATION_CHANGES_CHANNEL
from core.logging.context import get_request_id, request_id_scope

logger = structlog.get_logger(__name__)

DEFAULT_TABLES: tuple[str, ...] = ("notifications", "connection_requests")
PROTOCOL_VERSION = "1.0.0"

# Phoenix channel events
PHX_JOIN = "phx_join"
PHX_LEAVE = "phx_leave"
PHX_REPLY = "phx_reply"
PHX_ERROR = "phx_error"
PHX_CLOSE = "phx_close"
HEARTBEAT = "heartbeat"
POSTGRES_CHANGES = "postgres_changes"


class ChangeFeedSubscription:
    """Live subscription that calls ``refresh`` on every table change.

    Usable as a context manager::

        with ChangeFeedSubscription(user_id, refresh) as subscription:
            ...

    Args:
        user_id: ID of the viewer the subscription belongs to
        refresh: Callback invoked with no arguments on each change event
        access_token: Viewer session token sent with the channel join
        tables: Tables whose inserts, updates and deletes are watched
        channel: Name of the realtime channel to join
        url: Realtime websocket URL; defaults to the configured one
        heartbeat_seconds: Interval between heartbeats
        connect: Factory opening the websocket, given the full URL
    """

    def __init__(
        self,
        user_id: str,
        refresh: Callable[[], Any],
        access_token: str | None = None,
        tables: Sequence[str] = DEFAULT_TABLES,
        channel: str = NOTIFICATION_CHANGES_CHANNEL,
        url: str | None = None,
        heartbeat_seconds: float | None = None,
        connect: Callable[[str], Any] = websocket_connect,
    ) -> None:
        self.user_id = user_id
        self.refresh = refresh
        self.access_token = access_token
        self.tables = tuple(tables)
        self.topic = f"realtime:{channel}"
        self.url = url or get_realtime_url()
        self.heartbeat_seconds = (
            heartbeat_seconds
            if heartbeat_seconds is not None
            else float(settings.REALTIME_HEARTBEAT_SECONDS)
        )
        self._connect = connect
        self._connection: Any = None
        self._reader: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._refs = itertools.count(1)
        self._closed = False
        self._request_id = get_request_id()
        self.change_count = 0

    def __enter__(self) -> "ChangeFeedSubscription":
        return self.start()

    def __exit__(self, *_exc_info) -> None:
        self.close()

    @property
    def is_active(self) -> bool:
        """Whether the subscription is open and its reader is running."""
        return (
            self._connection is not None
            and not self._closed
            and self._reader is not None
            and self._reader.is_alive()
        )

    def start(self) -> "ChangeFeedSubscription":
        """Open the websocket, join the channel and start the reader thread.

        Returns:
            The subscription itself

        Raises:
            RuntimeError: If the subscription was already started or closed
            OSError: If the websocket cannot be opened
        """
        with self._lock:
            if self._closed or self._connection is not None:
                raise RuntimeError("Change feed subscription cannot be restarted")

            query = urlencode({"apikey": get_anon_key(), "vsn": PROTOCOL_VERSION})
            self._connection = self._connect(f"{self.url}?{query}")
            self._send(PHX_JOIN, self._join_payload())

            self._reader = threading.Thread(
                target=self._read_loop,
                name=f"ChangeFeed-{self.user_id}",
                daemon=True,
            )
            self._reader.start()

        logger.info(
            "Change feed subscription started",
            user_id=self.user_id,
            topic=self.topic,
            tables=list(self.tables),
        )
        return self

    def close(self) -> None:
        """Leave the channel, close the socket and stop the reader.

        Safe to call more than once and from the reader thread itself.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._stop_event.set()
            connection = self._connection

        if connection is not None:
            try:
                self._send(PHX_LEAVE, {})
            except ConnectionClosed:
                pass
            connection.close()

        reader = self._reader
        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=5.0)

        logger.info(
            "Change feed subscription closed",
            user_id=self.user_id,
            topic=self.topic,
            change_count=self.change_count,
        )

    def _join_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "config": {
                "broadcast": {"self": False},
                "presence": {"key": ""},
                "postgres_changes": [
                    {"event": "*", "schema": "public", "table": table}
                    for table in self.tables
                ],
            }
        }
        if self.access_token:
            payload["access_token"] = self.access_token
        return payload

    def _send(self, event: str, payload: dict[str, Any], topic: str | None = None) -> None:
        message = {
            "topic": topic or self.topic,
            "event": event,
            "payload": payload,
            "ref": str(next(self._refs)),
        }
        self._connection.send(json.dumps(message))

    def _read_loop(self) -> None:
        with request_id_scope(self._request_id):
            next_heartbeat = time.monotonic() + self.heartbeat_seconds
            while not self._stop_event.is_set():
                try:
                    try:
                        raw = self._connection.recv(
                            timeout=max(next_heartbeat - time.monotonic(), 0.0)
                        )
                    except TimeoutError:
                        self._send(HEARTBEAT, {}, topic="phoenix")
                        next_heartbeat = time.monotonic() + self.heartbeat_seconds
                        continue
                except ConnectionClosed:
                    if not self._stop_event.is_set():
                        logger.warning(
                            "Change feed connection dropped",
                            user_id=self.user_id,
                            topic=self.topic,
                        )
                    break

                self._handle_message(raw)

    def _handle_message(self, raw: str | bytes) -> None:
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed change feed message", user_id=self.user_id)
            return

        event = message.get("event")
        if message.get("topic") != self.topic:
            return

        if event == POSTGRES_CHANGES:
            data = (message.get("payload") or {}).get("data") or {}
            self.change_count += 1
            logger.debug(
                "Change feed event received",
                user_id=self.user_id,
                table=data.get("table"),
                change_type=data.get("type"),
            )
            self._invoke_refresh()
        elif event == PHX_REPLY:
            reply_status = (message.get("payload") or {}).get("status")
            if reply_status != "ok":
                logger.error(
                    "Change feed channel reply was not ok",
                    user_id=self.user_id,
                    status=reply_status,
                    response=(message.get("payload") or {}).get("response"),
                )
        elif event in (PHX_ERROR, PHX_CLOSE):
            logger.warning(
                "Change feed channel closed by backend",
                user_id=self.user_id,
                channel_event=event,
            )

    def _invoke_refresh(self) -> None:
        try:
            self.refresh()
        except Exception:
            # A failed refresh must not end the subscription
            logger.exception("Change feed refresh failed", user_id=self.user_id)
