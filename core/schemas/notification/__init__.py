"""Notification dispatch and read-model schemas."""

from core.schemas.notification.delivery import (
    DeliveryResult,
    DispatchOutcome,
    EventSubmissionResponse,
    RecipientOutcome,
)
from core.schemas.notification.notification_event import (
    NotificationEvent,
    RenderedMessage,
)
from core.schemas.notification.notification_record import (
    MarkAllReadResponse,
    NotificationDraft,
    NotificationPage,
    NotificationRecord,
    UnreadCountResponse,
)

__all__ = [
    "DeliveryResult",
    "DispatchOutcome",
    "EventSubmissionResponse",
    "MarkAllReadResponse",
    "NotificationDraft",
    "NotificationEvent",
    "NotificationPage",
    "NotificationRecord",
    "RecipientOutcome",
    "RenderedMessage",
    "UnreadCountResponse",
]
