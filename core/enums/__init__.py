"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.notification import (
    CATEGORY_BY_TYPE,
    CHANNELS_BY_SELECTOR,
    ChannelSelector,
    DeliveryChannel,
    DeliveryStatus,
    InvitationStatus,
    NotificationType,
    PreferenceCategory,
)

__all__ = [
    "CATEGORY_BY_TYPE",
    "CHANNELS_BY_SELECTOR",
    "ChannelSelector",
    "DeliveryChannel",
    "DeliveryStatus",
    "HealthStatus",
    "InvitationStatus",
    "NotificationType",
    "PreferenceCategory",
]
