"""Subset of the Telegram Bot API ``Update`` object the webhook reads."""

from pydantic import BaseModel, ConfigDict, Field


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int | str
    type: str | None = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int | None = None
    chat: TelegramChat
    text: str | None = None


class TelegramUpdate(BaseModel):
    """Incoming webhook update; only new messages are handled."""

    model_config = ConfigDict(extra="ignore")

    update_id: int | None = None
    message: TelegramMessage | None = Field(None)

    @property
    def chat_id(self) -> str | None:
        if self.message is None:
            return None
        return str(self.message.chat.id)

    @property
    def text(self) -> str:
        if self.message is None or self.message.text is None:
            return ""
        return self.message.text
