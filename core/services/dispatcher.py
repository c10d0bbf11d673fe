"""Notification dispatcher: fans one event out to recipients and channels."""

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from django.db import DatabaseError

import structlog
from pydantic import ValidationError as PydanticValidationError

from core.enums import DeliveryChannel
from core.exceptions.notification_exceptions import ValidationError
from core.logging.context import (
    bind_dispatch_context,
    clear_dispatch_context,
    propagate_context,
)
from core.repositories.base import NotificationRepository
from core.schemas.notification import (
    DeliveryResult,
    DispatchOutcome,
    NotificationEvent,
    RecipientOutcome,
    RenderedMessage,
)
from core.services.message_formatter import render_event
from core.services.preference_service import PreferenceService
from core.services.transports.base import CHANNEL_NOT_CONFIGURED, ChannelTransport

logger = structlog.get_logger(__name__)


@dataclass
class _PendingSend:
    outcome: RecipientOutcome
    channel: DeliveryChannel
    transport: ChannelTransport
    target: Any


class NotificationDispatcher:
    """Delivers one domain event to every recipient on every chosen channel.

    For each recipient the in-app notification is written first on the
    calling thread; unknown recipients are skipped without affecting the
    others. External channels come from the recipient's preferences and are
    sent concurrently on a bounded thread pool. Each channel is attempted at
    most once per event and channel failures never propagate to the caller.
    """

    def __init__(
        self,
        preferences: PreferenceService,
        in_app: ChannelTransport,
        transports: Mapping[DeliveryChannel, ChannelTransport],
        notifications: NotificationRepository,
        max_concurrent_sends: int = 16,
    ) -> None:
        self._preferences = preferences
        self._in_app = in_app
        self._transports = dict(transports)
        self._notifications = notifications
        self._max_concurrent_sends = max(1, max_concurrent_sends)

    def dispatch(
        self, event: NotificationEvent | Mapping[str, Any]
    ) -> DispatchOutcome:
        """Dispatch one event.

        Args:
            event: The event, or its JSON-shaped mapping.

        Returns:
            Per-recipient, per-channel results.

        Raises:
            ValidationError: If the event is structurally invalid.
        """
        event = self._validate(event)
        message = render_event(event)
        dispatch_id = uuid4().hex

        bind_dispatch_context(dispatch_id, str(event.type))
        try:
            outcome = DispatchOutcome(dispatch_id=dispatch_id, event_type=event.type)
            pending: list[_PendingSend] = []

            for recipient_id in event.recipient_ids:
                recipient = self._dispatch_in_app(recipient_id, message)
                outcome.recipients.append(recipient)
                if recipient.notification_id is None:
                    continue
                pending.extend(self._prepare_external(recipient, event.type))

            self._deliver_all(pending, message)
            self._record(outcome)

            logger.info(
                "notification_dispatched",
                recipient_count=len(outcome.recipients),
                delivered_count=outcome.delivered_count,
                skipped_count=len(outcome.skipped_recipients),
                external_sends=len(pending),
            )
            return outcome
        finally:
            clear_dispatch_context()

    @staticmethod
    def _validate(event: NotificationEvent | Mapping[str, Any]) -> NotificationEvent:
        if isinstance(event, NotificationEvent):
            return event
        try:
            return NotificationEvent.model_validate(dict(event))
        except PydanticValidationError as e:
            raise ValidationError(
                "Invalid notification event",
                errors=e.errors(include_url=False, include_context=False),
            ) from e

    def _dispatch_in_app(
        self, recipient_id: UUID, message: RenderedMessage
    ) -> RecipientOutcome:
        result = self._in_app.send(recipient_id, message)
        if not result.is_delivered:
            logger.warning(
                "recipient_in_app_not_delivered",
                recipient_id=str(recipient_id),
                status=result.status,
                reason=result.reason,
                error=result.error,
            )
        return RecipientOutcome(
            recipient_id=recipient_id,
            notification_id=result.notification_id,
            channels={DeliveryChannel.IN_APP.value: result},
        )

    def _prepare_external(
        self, recipient: RecipientOutcome, notification_type: str
    ) -> list[_PendingSend]:
        try:
            channels = self._preferences.resolve_channels(
                recipient.recipient_id, notification_type
            )
        except DatabaseError as e:
            logger.error(
                "preference_lookup_failed",
                recipient_id=str(recipient.recipient_id),
                error=str(e),
            )
            return []

        pending = []
        for channel in sorted(channels, key=lambda c: c.value):
            transport = self._transports.get(channel)
            if transport is None:
                recipient.channels[channel.value] = DeliveryResult.skipped(
                    CHANNEL_NOT_CONFIGURED
                )
                continue
            try:
                prepared = transport.prepare(recipient.recipient_id)
            except DatabaseError as e:
                logger.error(
                    "channel_prepare_failed",
                    channel=channel.value,
                    recipient_id=str(recipient.recipient_id),
                    error=str(e),
                )
                prepared = DeliveryResult.failed(f"address lookup failed: {e}")

            if isinstance(prepared, DeliveryResult):
                recipient.channels[channel.value] = prepared
            else:
                pending.append(_PendingSend(recipient, channel, transport, prepared))
        return pending

    def _deliver_all(
        self, pending: list[_PendingSend], message: RenderedMessage
    ) -> None:
        if not pending:
            return

        workers = min(self._max_concurrent_sends, len(pending))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="notification-send"
        ) as pool:
            futures = {
                pool.submit(
                    propagate_context(send.transport.deliver), send.target, message
                ): send
                for send in pending
            }
            for future in as_completed(futures):
                send = futures[future]
                try:
                    result = future.result()
                except Exception as e:
                    logger.exception(
                        "channel_deliver_crashed",
                        channel=send.channel.value,
                        recipient_id=str(send.outcome.recipient_id),
                    )
                    result = DeliveryResult.failed(
                        f"unexpected error: {type(e).__name__}"
                    )
                send.outcome.channels[send.channel.value] = result

    def _record(self, outcome: DispatchOutcome) -> None:
        for recipient in outcome.recipients:
            if recipient.notification_id is None:
                continue
            for channel, result in recipient.channels.items():
                try:
                    self._notifications.record_delivery(
                        recipient.notification_id, DeliveryChannel(channel), result
                    )
                except DatabaseError as e:
                    logger.error(
                        "delivery_record_failed",
                        notification_id=str(recipient.notification_id),
                        channel=channel,
                        error=str(e),
                    )
