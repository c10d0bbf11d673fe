"""Database models for core application."""

from core.models.chat_link import ChatLink
from core.models.notification import Notification
from core.models.notification_delivery import NotificationDelivery
from core.models.preferences import NotificationPreferences
from core.models.push_subscription import PushSubscription
from core.models.user import User

__all__ = [
    "ChatLink",
    "Notification",
    "NotificationDelivery",
    "NotificationPreferences",
    "PushSubscription",
    "User",
]
