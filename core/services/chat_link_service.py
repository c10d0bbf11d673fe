"""Linking of WorkTrac users to their Telegram chats."""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import UUID

from django.utils import timezone

import structlog

from core.constants import (
    CHAT_TEST_MESSAGE,
    CHAT_TEST_TITLE,
    VERIFICATION_CODE_LENGTH,
    VERIFICATION_CODE_MAX_ATTEMPTS,
)
from core.exceptions.notification_exceptions import (
    ChatLinkNotFoundError,
    ConflictError,
    ExpiredOrInvalidCodeError,
    RecipientNotFoundError,
)
from core.repositories.base import ChatLinkRepository, UserRepository
from core.schemas.chat import ChatLinkStatus, VerificationCodeResponse
from core.services.downstream.telegram_client import TelegramBotClient
from core.services.message_formatter import escape_markdown

logger = structlog.get_logger(__name__)


def generate_code() -> str:
    """Return a uniformly random 6-digit code without a leading zero."""
    low = 10 ** (VERIFICATION_CODE_LENGTH - 1)
    high = 10**VERIFICATION_CODE_LENGTH
    return str(low + secrets.randbelow(high - low))


class ChatLinkService:
    """Issues verification codes and binds chats to users.

    A user is Unlinked, has a code outstanding, or is Linked. Expiry is checked
    lazily whenever a code is used; expired codes are never swept.
    """

    def __init__(
        self,
        links: ChatLinkRepository,
        users: UserRepository,
        client: TelegramBotClient,
        code_ttl_minutes: int = 30,
        clock: Callable[[], datetime] = timezone.now,
        code_generator: Callable[[], str] = generate_code,
    ) -> None:
        self._links = links
        self._users = users
        self._client = client
        self._code_ttl = timedelta(minutes=code_ttl_minutes)
        self._clock = clock
        self._generate_code = code_generator

    def issue_code(self, user_id: UUID) -> VerificationCodeResponse:
        """Issue a fresh code, replacing any code the user still holds.

        Raises:
            RecipientNotFoundError: If the user does not exist
            ConflictError: If no unused code could be found
        """
        if self._users.get_user(user_id) is None:
            raise RecipientNotFoundError(user_id)

        now = self._clock()
        expires_at = now + self._code_ttl
        for _ in range(VERIFICATION_CODE_MAX_ATTEMPTS):
            code = self._generate_code()
            if self._links.store_code(user_id, code, expires_at, now):
                logger.info(
                    "chat_verification_code_issued",
                    user_id=str(user_id),
                    expires_at=expires_at.isoformat(),
                )
                return VerificationCodeResponse(
                    verification_code=code, expires_at=expires_at
                )

        logger.error("chat_verification_code_exhausted", user_id=str(user_id))
        raise ConflictError(
            "Could not issue a verification code",
            detail="Please try again in a moment",
        )

    def verify_code(self, code: str, chat_id: str) -> UUID:
        """Consume ``code`` and link its holder to ``chat_id``.

        Raises:
            ExpiredOrInvalidCodeError: If the code is unknown, expired or was
                already used
        """
        user_id = self._links.consume_code(code, str(chat_id), self._clock())
        if user_id is None:
            logger.info("chat_verification_rejected")
            raise ExpiredOrInvalidCodeError()

        logger.info("chat_account_linked", user_id=str(user_id))
        return user_id

    def disconnect(self, user_id: UUID) -> bool:
        """Remove the user's chat link. Unlinked users are a no-op."""
        removed = self._links.delete(user_id)
        logger.info("chat_account_disconnected", user_id=str(user_id), removed=removed)
        return removed

    def get_status(self, user_id: UUID) -> ChatLinkStatus:
        link = self._links.get(user_id)
        if link is None:
            return ChatLinkStatus(linked=False, chat_connected=False, code_pending=False)

        code_pending = bool(
            link.verification_code
            and link.code_expires_at
            and link.code_expires_at > self._clock()
        )
        return ChatLinkStatus(
            linked=link.linked,
            chat_connected=bool(link.chat_id),
            code_pending=code_pending,
            code_expires_at=link.code_expires_at if code_pending else None,
        )

    def send_test_message(self, user_id: UUID) -> None:
        """Send a fixed test message to the user's linked chat.

        Raises:
            ChatLinkNotFoundError: If the user has no linked chat
            TransportError: If the Bot API call fails
        """
        link = self._links.get(user_id)
        if link is None or not link.linked or not link.chat_id:
            raise ChatLinkNotFoundError(user_id)

        text = f"*{escape_markdown(CHAT_TEST_TITLE)}*\n\n{escape_markdown(CHAT_TEST_MESSAGE)}"
        self._client.send_message(link.chat_id, text)
        logger.info("chat_test_message_sent", user_id=str(user_id))
