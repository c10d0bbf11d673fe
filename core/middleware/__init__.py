"""Middleware components for the notification engine."""

from core.middleware.request_context import (
    ProcessTimeMiddleware,
    RequestIDMiddleware,
)

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
]
