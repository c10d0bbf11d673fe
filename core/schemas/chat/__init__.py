"""Chat linking and Telegram webhook schemas."""

from core.schemas.chat.chat_link import (
    ChatLinkRecord,
    ChatLinkStatus,
    DisconnectRequest,
    VerificationCodeResponse,
)
from core.schemas.chat.telegram_update import TelegramUpdate

__all__ = [
    "ChatLinkRecord",
    "ChatLinkStatus",
    "DisconnectRequest",
    "TelegramUpdate",
    "VerificationCodeResponse",
]
