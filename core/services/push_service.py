"""Push subscription management and single-recipient push sends."""

from uuid import UUID

import structlog

from core.exceptions.notification_exceptions import (
    PushSubscriptionNotFoundError,
    TransportError,
)
from core.repositories.base import PushSubscriptionRepository
from core.schemas.notification import DeliveryResult, RenderedMessage
from core.schemas.push import (
    PushSendRequest,
    PushSubscriptionRecord,
    PushSubscriptionRequest,
)
from core.services.transports.base import NO_SUBSCRIPTION
from core.services.transports.push_transport import PushTransport

logger = structlog.get_logger(__name__)


class PushService:
    """Stores browser subscriptions and sends ad-hoc push messages."""

    def __init__(
        self, subscriptions: PushSubscriptionRepository, transport: PushTransport
    ) -> None:
        self._subscriptions = subscriptions
        self._transport = transport

    def register(
        self, user_id: UUID, request: PushSubscriptionRequest
    ) -> PushSubscriptionRecord:
        """Store the user's subscription, replacing any previous one."""
        record = self._subscriptions.save(
            user_id,
            endpoint=request.endpoint,
            p256dh=request.keys.p256dh,
            auth=request.keys.auth,
        )
        logger.info("push_subscription_registered", user_id=str(user_id))
        return record

    def unregister(self, user_id: UUID) -> bool:
        removed = self._subscriptions.delete(user_id)
        logger.info("push_subscription_removed", user_id=str(user_id), removed=removed)
        return removed

    def send(self, request: PushSendRequest) -> None:
        """Send one push message to one user, without an in-app record.

        Raises:
            PushSubscriptionNotFoundError: If the user has no subscription
            TransportError: If push is not configured or the send failed
        """
        message = RenderedMessage(
            title=request.title,
            message=request.message,
            action_url=request.action_url,
        )
        prepared = self._transport.prepare(request.user_id)
        if isinstance(prepared, DeliveryResult):
            if prepared.reason == NO_SUBSCRIPTION:
                raise PushSubscriptionNotFoundError(request.user_id)
            raise TransportError("Push notifications are not configured", channel="push")

        result = self._transport.deliver(prepared, message)
        if not result.is_delivered:
            raise TransportError(result.error or "Push send failed", channel="push")
