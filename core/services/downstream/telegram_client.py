"""Telegram Bot API client."""

from typing import Any

import structlog

from core.exceptions.notification_exceptions import TransportError
from core.services.downstream.base_downstream_client import BaseDownstreamClient

logger = structlog.get_logger(__name__)


class TelegramBotClient(BaseDownstreamClient):
    """Calls the Bot API methods the engine needs.

    The bot token is part of every method URL, so requests are logged by
    method name only.
    """

    def __init__(self, base_url: str, bot_token: str, timeout: float = 5):
        """Initialize the client.

        Args:
            base_url: Bot API base URL, e.g. https://api.telegram.org
            bot_token: Token issued by BotFather
            timeout: Per-request timeout in seconds
        """
        super().__init__(service_name="telegram", base_url=base_url, timeout=timeout)
        self._bot_token = bot_token

    @property
    def configured(self) -> bool:
        return bool(self._bot_token)

    def _call(self, method: str, payload: dict[str, Any] | None = None) -> Any:
        if not self.configured:
            raise TransportError("Telegram bot token is not configured", channel="chat")

        response = self._make_request(
            "POST",
            f"/bot{self._bot_token}/{method}",
            json_data=payload or {},
            operation=method,
        )
        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"telegram {method} returned a non-JSON body", channel="chat"
            ) from e
        if not body.get("ok", False):
            raise TransportError(
                f"telegram {method} rejected: {body.get('description', 'unknown error')}",
                channel="chat",
            )
        return body.get("result")

    def send_message(
        self, chat_id: str, text: str, parse_mode: str | None = "Markdown"
    ) -> None:
        """Send a text message to a chat.

        Raises:
            TransportError: If the Bot API call fails
        """
        payload: dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "disable_web_page_preview": True,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode
        self._call("sendMessage", payload)

    def set_webhook(self, url: str, secret_token: str | None = None) -> None:
        """Register the engine's webhook URL with the Bot API."""
        payload: dict[str, Any] = {"url": url, "allowed_updates": ["message"]}
        if secret_token:
            payload["secret_token"] = secret_token
        self._call("setWebhook", payload)
        logger.info("telegram_webhook_registered", webhook_url=url)

    def get_me(self) -> dict[str, Any]:
        """Return the bot's own user record."""
        return self._call("getMe")
