"""In-app transport: the notification row the web app lists."""

from uuid import UUID

from django.db import DatabaseError

import structlog

from core.enums import DeliveryChannel
from core.repositories.base import NotificationRepository, UserRepository
from core.schemas.notification import (
    DeliveryResult,
    NotificationDraft,
    RenderedMessage,
)
from core.services.transports.base import UNKNOWN_RECIPIENT, ChannelTransport

logger = structlog.get_logger(__name__)


class InAppTransport(ChannelTransport):
    """Writes one Notification per recipient; invoked for every dispatch."""

    channel = DeliveryChannel.IN_APP

    def __init__(
        self, notifications: NotificationRepository, users: UserRepository
    ) -> None:
        self._notifications = notifications
        self._users = users

    def prepare(self, recipient_id: UUID) -> UUID | DeliveryResult:
        if self._users.get_user(recipient_id) is None:
            return DeliveryResult.skipped(UNKNOWN_RECIPIENT)
        return recipient_id

    def deliver(self, target: UUID, message: RenderedMessage) -> DeliveryResult:
        draft = NotificationDraft(
            user_id=target,
            notification_type=message.notification_type,
            title=message.title,
            message=message.message,
            action_url=message.action_url,
            related_id=message.related_id,
            metadata=message.metadata,
        )
        try:
            record = self._notifications.create(draft)
        except DatabaseError as e:
            logger.error(
                "in_app_transport_failed",
                recipient_id=str(target),
                error=str(e),
            )
            return DeliveryResult.failed(f"could not store notification: {e}")
        return DeliveryResult.delivered(record.notification_id)
