"""Chat link state and verification code responses."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class ChatLinkRecord(BaseSchemaModel):
    """Stored link state of one user."""

    user_id: UUID
    chat_id: str | None = None
    linked: bool = False
    verification_code: str | None = None
    code_expires_at: datetime | None = None


class ChatLinkStatus(BaseSchemaModel):
    """Link status shown on the notification settings page."""

    linked: bool = Field(..., description="Whether a chat account is linked")
    chat_connected: bool = Field(..., description="Whether a chat id is stored")
    code_pending: bool = Field(
        ..., description="Whether an unexpired verification code is outstanding"
    )
    code_expires_at: datetime | None = Field(
        None, description="Expiry of the outstanding code"
    )


class VerificationCodeResponse(BaseSchemaModel):
    """A freshly issued verification code."""

    verification_code: str = Field(..., description="6-digit code to send to the bot")
    expires_at: datetime = Field(..., description="When the code stops working")


class DisconnectRequest(BaseSchemaModel):
    """Body of the chat disconnect endpoint."""

    user_id: UUID = Field(..., description="User whose chat link is removed")
