"""Telegram webhook handling: classify incoming messages and reply."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from core.constants import (
    CHAT_ERROR_MESSAGE,
    CHAT_FALLBACK_MESSAGE,
    CHAT_INVALID_CODE_MESSAGE,
    CHAT_LINK_SUCCESS_MESSAGE,
    CHAT_WELCOME_MESSAGE,
)
from core.exceptions.notification_exceptions import (
    ExpiredOrInvalidCodeError,
    TransportError,
)
from core.schemas.chat import TelegramUpdate
from core.services.chat_link_service import ChatLinkService
from core.services.downstream.telegram_client import TelegramBotClient

logger = structlog.get_logger(__name__)

START_COMMAND = "/start"
CODE_PATTERN = re.compile(r"[0-9]{6}")


@dataclass(frozen=True)
class Matcher:
    """One classifier rule: a route name, its predicate and its reply builder."""

    name: str
    matches: Callable[[str], bool]
    reply: Callable[[str, str], str]


class ChatWebhookService:
    """Replies to messages sent to the bot.

    Messages are classified by the first matching rule, in order: the
    ``/start`` command, a 6-digit verification code, anything else.
    """

    def __init__(self, linking: ChatLinkService, client: TelegramBotClient) -> None:
        self._linking = linking
        self._client = client
        self._matchers = (
            Matcher("start", lambda text: text.startswith(START_COMMAND), self._welcome),
            Matcher(
                "verification",
                lambda text: CODE_PATTERN.fullmatch(text) is not None,
                self._verify,
            ),
            Matcher("fallback", lambda text: True, self._fallback),
        )

    def classify(self, text: str) -> Matcher:
        """Return the first matcher accepting ``text``."""
        return next(matcher for matcher in self._matchers if matcher.matches(text))

    def handle_update(self, payload: Mapping[str, Any]) -> str | None:
        """Handle one webhook update.

        Args:
            payload: Decoded Telegram ``Update`` JSON

        Returns:
            Name of the matched route, or None when the update carries no
            chat message.
        """
        try:
            update = TelegramUpdate.model_validate(dict(payload))
        except PydanticValidationError:
            logger.info("chat_webhook_ignored", reason="unparseable_update")
            return None

        chat_id = update.chat_id
        if chat_id is None:
            logger.debug("chat_webhook_ignored", reason="no_message")
            return None

        text = update.text
        matcher = self.classify(text)
        logger.info("chat_webhook_received", route=matcher.name)

        try:
            reply = matcher.reply(text, chat_id)
        except Exception:
            logger.exception("chat_webhook_failed", route=matcher.name)
            reply = CHAT_ERROR_MESSAGE
        self._send_reply(chat_id, reply)
        return matcher.name

    def _welcome(self, text: str, chat_id: str) -> str:
        return CHAT_WELCOME_MESSAGE

    def _fallback(self, text: str, chat_id: str) -> str:
        return CHAT_FALLBACK_MESSAGE

    def _verify(self, code: str, chat_id: str) -> str:
        try:
            self._linking.verify_code(code, chat_id)
        except ExpiredOrInvalidCodeError:
            return CHAT_INVALID_CODE_MESSAGE
        return CHAT_LINK_SUCCESS_MESSAGE

    def _send_reply(self, chat_id: str, text: str) -> None:
        try:
            self._client.send_message(chat_id, text, parse_mode=None)
        except TransportError as e:
            logger.warning("chat_reply_failed", error=str(e))
