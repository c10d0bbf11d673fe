"""Web Push transport using VAPID-signed requests."""

import json
from typing import Any
from uuid import UUID

import requests
import structlog
from pywebpush import WebPushException, webpush

from core.enums import DeliveryChannel
from core.repositories.base import PushSubscriptionRepository
from core.schemas.notification import DeliveryResult, RenderedMessage
from core.services.message_formatter import format_push_payload
from core.services.transports.base import (
    CHANNEL_NOT_CONFIGURED,
    NO_SUBSCRIPTION,
    ChannelTransport,
)

logger = structlog.get_logger(__name__)


class PushTransport(ChannelTransport):
    """Sends browser push notifications to the user's stored subscription."""

    channel = DeliveryChannel.PUSH

    def __init__(
        self,
        subscriptions: PushSubscriptionRepository,
        vapid_private_key: str,
        vapid_claims_email: str,
        timeout: float,
    ) -> None:
        self._subscriptions = subscriptions
        self._vapid_private_key = vapid_private_key
        self._vapid_claims_email = vapid_claims_email
        self._timeout = timeout

    def prepare(self, recipient_id: UUID) -> dict[str, Any] | DeliveryResult:
        if not self._vapid_private_key:
            return DeliveryResult.skipped(CHANNEL_NOT_CONFIGURED)
        subscription = self._subscriptions.get(recipient_id)
        if subscription is None:
            return DeliveryResult.skipped(NO_SUBSCRIPTION)
        return subscription.as_subscription_info()

    def deliver(
        self, target: dict[str, Any], message: RenderedMessage
    ) -> DeliveryResult:
        try:
            webpush(
                subscription_info=target,
                data=json.dumps(format_push_payload(message)),
                vapid_private_key=self._vapid_private_key,
                # pywebpush adds aud/exp to the claims dict it is given
                vapid_claims={"sub": self._vapid_claims_email},
                timeout=self._timeout,
            )
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.warning(
                "push_transport_failed",
                status_code=status_code,
                error=str(e),
            )
            return DeliveryResult.failed(f"web push rejected (status {status_code})")
        except (requests.RequestException, ValueError) as e:
            logger.warning("push_transport_failed", error=str(e))
            return DeliveryResult.failed(f"web push error: {type(e).__name__}")

        logger.info("push_notification_sent")
        return DeliveryResult.delivered()
