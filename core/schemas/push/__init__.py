"""Web Push schemas."""

from core.schemas.push.push_subscription import (
    PushSendRequest,
    PushSendResponse,
    PushSubscriptionRecord,
    PushSubscriptionRequest,
)

__all__ = [
    "PushSendRequest",
    "PushSendResponse",
    "PushSubscriptionRecord",
    "PushSubscriptionRequest",
]
