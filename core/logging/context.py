"""Thread-local context management for request tracking."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

# Thread-local storage for request context
_request_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Store the request ID in thread-local storage.

    Args:
        request_id: The unique request identifier to store.
    """
    _request_context.request_id = request_id


def get_request_id() -> str | None:
    """Retrieve the request ID from thread-local storage.

    Returns:
        The current request ID, or None if not set.
    """
    return getattr(_request_context, "request_id", None)


def clear_request_id() -> None:
    """Clear the request ID from thread-local storage."""
    if hasattr(_request_context, "request_id"):
        delattr(_request_context, "request_id")


@contextmanager
def request_id_scope(request_id: str | None) -> Iterator[None]:
    """Bind a request ID for the duration of a block on the current thread.

    Realtime reader threads use this so that logs emitted while handling
    change events carry the ID of the request that opened the subscription.

    Args:
        request_id: The request ID to bind; None leaves the context unset.
    """
    previous = get_request_id()
    if request_id:
        set_request_id(request_id)
    try:
        yield
    finally:
        if previous is None:
            clear_request_id()
        else:
            set_request_id(previous)
