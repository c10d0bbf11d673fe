"""Storage contracts and their Django ORM implementations."""

from core.repositories.base import (
    ChatLinkRepository,
    NotificationRepository,
    PreferenceRepository,
    PushSubscriptionRepository,
    UserRepository,
)
from core.repositories.chat_link_repository import DjangoChatLinkRepository
from core.repositories.notification_repository import DjangoNotificationRepository
from core.repositories.preference_repository import DjangoPreferenceRepository
from core.repositories.push_subscription_repository import (
    DjangoPushSubscriptionRepository,
)
from core.repositories.user_repository import DjangoUserRepository

__all__ = [
    "ChatLinkRepository",
    "DjangoChatLinkRepository",
    "DjangoNotificationRepository",
    "DjangoPreferenceRepository",
    "DjangoPushSubscriptionRepository",
    "DjangoUserRepository",
    "NotificationRepository",
    "PreferenceRepository",
    "PushSubscriptionRepository",
    "UserRepository",
]
