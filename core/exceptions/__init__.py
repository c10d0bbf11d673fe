"""Exception handling utilities for the notification engine."""

from core.exceptions.handlers import custom_exception_handler
from core.exceptions.notification_exceptions import (
    ChatLinkNotFoundError,
    ConflictError,
    ExpiredOrInvalidCodeError,
    NotFoundError,
    NotificationEngineError,
    NotificationNotFoundError,
    PushSubscriptionNotFoundError,
    RecipientNotFoundError,
    TransportError,
    ValidationError,
)

__all__ = [
    "ChatLinkNotFoundError",
    "ConflictError",
    "ExpiredOrInvalidCodeError",
    "NotFoundError",
    "NotificationEngineError",
    "NotificationNotFoundError",
    "PushSubscriptionNotFoundError",
    "RecipientNotFoundError",
    "TransportError",
    "ValidationError",
    "custom_exception_handler",
]
