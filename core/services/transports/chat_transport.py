"""Chat transport: Telegram messages to linked accounts."""

from uuid import UUID

import structlog

from core.enums import DeliveryChannel
from core.exceptions.notification_exceptions import TransportError
from core.repositories.base import ChatLinkRepository
from core.schemas.notification import DeliveryResult, RenderedMessage
from core.services.downstream.telegram_client import TelegramBotClient
from core.services.message_formatter import format_chat_message
from core.services.transports.base import (
    CHANNEL_NOT_CONFIGURED,
    NOT_LINKED,
    ChannelTransport,
)

logger = structlog.get_logger(__name__)


class ChatTransport(ChannelTransport):
    """Sends Markdown-formatted notifications through the Telegram bot."""

    channel = DeliveryChannel.CHAT

    def __init__(
        self,
        links: ChatLinkRepository,
        client: TelegramBotClient,
        frontend_base_url: str,
        max_message_length: int,
    ) -> None:
        self._links = links
        self._client = client
        self._frontend_base_url = frontend_base_url
        self._max_message_length = max_message_length

    def prepare(self, recipient_id: UUID) -> str | DeliveryResult:
        if not self._client.configured:
            return DeliveryResult.skipped(CHANNEL_NOT_CONFIGURED)
        link = self._links.get(recipient_id)
        if link is None or not link.linked or not link.chat_id:
            return DeliveryResult.skipped(NOT_LINKED)
        return link.chat_id

    def deliver(self, target: str, message: RenderedMessage) -> DeliveryResult:
        text = format_chat_message(
            message, self._max_message_length, self._frontend_base_url
        )
        try:
            self._client.send_message(target, text)
        except TransportError as e:
            logger.warning("chat_transport_failed", error=str(e))
            return DeliveryResult.failed(str(e))

        logger.info("chat_notification_sent")
        return DeliveryResult.delivered()
