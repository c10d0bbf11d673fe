"""Thread-local logging context for requests and dispatches."""

import functools
import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

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


def bind_dispatch_context(dispatch_id: str, event_type: str) -> None:
    """Attach the current dispatch to every log event on this thread.

    Args:
        dispatch_id: Identifier generated for one dispatch call.
        event_type: Notification type being dispatched.
    """
    _request_context.dispatch = {"dispatch_id": dispatch_id, "event_type": event_type}


def get_dispatch_context() -> dict[str, str]:
    """Return the dispatch fields bound on this thread (possibly empty)."""
    return dict(getattr(_request_context, "dispatch", {}))


def clear_dispatch_context() -> None:
    """Remove dispatch fields from this thread."""
    if hasattr(_request_context, "dispatch"):
        delattr(_request_context, "dispatch")


def propagate_context(func: Callable[..., T]) -> Callable[..., T]:
    """Wrap ``func`` so it runs with the caller's logging context.

    Thread pool workers do not inherit thread-locals; the wrapper captures
    the request id and dispatch fields now and restores them around the call.

    Args:
        func: Callable to run on another thread.

    Returns:
        Wrapped callable.
    """
    request_id = get_request_id()
    dispatch = get_dispatch_context()

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        if request_id:
            set_request_id(request_id)
        if dispatch:
            bind_dispatch_context(dispatch["dispatch_id"], dispatch["event_type"])
        try:
            return func(*args, **kwargs)
        finally:
            clear_request_id()
            clear_dispatch_context()

    return wrapper
