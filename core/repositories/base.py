"""Read/write contracts the engine's services depend on.

Services only see these protocols, so the storage engine can be swapped and
unit tests can use in-memory fakes.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from core.enums import DeliveryChannel
from core.schemas.chat import ChatLinkRecord
from core.schemas.notification import (
    DeliveryResult,
    NotificationDraft,
    NotificationRecord,
)
from core.schemas.preferences import NotificationPreferencesSchema
from core.schemas.push import PushSubscriptionRecord
from core.schemas.user import UserRecord

# Keyset position: (created_at, notification_id) of the last row already seen.
NotificationCursor = tuple[datetime, UUID]


class UserRepository(Protocol):
    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user, or None when no such user exists."""


class PreferenceRepository(Protocol):
    def get(self, user_id: UUID) -> NotificationPreferencesSchema | None:
        """Return stored preferences, or None when the user never saved any."""

    def save(self, user_id: UUID, preferences: NotificationPreferencesSchema) -> None:
        """Replace the user's preferences."""


class NotificationRepository(Protocol):
    def create(self, draft: NotificationDraft) -> NotificationRecord:
        """Persist one in-app notification."""

    def list_page(
        self,
        user_id: UUID,
        before: NotificationCursor | None,
        limit: int,
        unread_only: bool = False,
    ) -> list[NotificationRecord]:
        """Return up to ``limit`` notifications older than ``before``, newest first."""

    def count_unread(self, user_id: UUID) -> int:
        """Count unread notifications of the user."""

    def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        """Set the read flag; False when the notification is not the user's."""

    def mark_all_read(self, user_id: UUID, created_before: datetime) -> int:
        """Mark unread notifications created up to the boundary; return the count."""

    def record_delivery(
        self,
        notification_id: UUID,
        channel: DeliveryChannel,
        result: DeliveryResult,
    ) -> None:
        """Store the outcome of one channel attempt."""


class ChatLinkRepository(Protocol):
    def get(self, user_id: UUID) -> ChatLinkRecord | None:
        """Return the user's link row, if any."""

    def store_code(
        self, user_id: UUID, code: str, expires_at: datetime, now: datetime
    ) -> bool:
        """Replace the user's outstanding code.

        Returns False, storing nothing, when another user holds the same
        unexpired code.
        """

    def consume_code(self, code: str, chat_id: str, now: datetime) -> UUID | None:
        """Link the holder of an unexpired ``code`` to ``chat_id``.

        Returns the linked user, or None when no row was updated.
        """

    def delete(self, user_id: UUID) -> bool:
        """Remove the user's link row; False when there was none."""


class PushSubscriptionRepository(Protocol):
    def get(self, user_id: UUID) -> PushSubscriptionRecord | None:
        """Return the user's subscription, if any."""

    def save(
        self, user_id: UUID, endpoint: str, p256dh: str, auth: str
    ) -> PushSubscriptionRecord:
        """Create or replace the user's subscription."""

    def delete(self, user_id: UUID) -> bool:
        """Remove the subscription; False when there was none."""
