"""Logging utilities for the notification engine."""

from core.logging.config import setup_logging
from core.logging.context import (
    bind_dispatch_context,
    clear_dispatch_context,
    get_request_id,
    propagate_context,
    set_request_id,
)

__all__ = [
    "bind_dispatch_context",
    "clear_dispatch_context",
    "get_request_id",
    "propagate_context",
    "set_request_id",
    "setup_logging",
]
