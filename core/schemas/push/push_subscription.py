"""Push subscription registration and single-recipient push requests."""

from typing import Any
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class PushSubscriptionKeys(BaseSchemaModel):
    p256dh: str = Field(..., min_length=1, max_length=255)
    auth: str = Field(..., min_length=1, max_length=255)


class PushSubscriptionRequest(BaseSchemaModel):
    """``PushSubscription.toJSON()`` as sent by the browser."""

    endpoint: str = Field(..., pattern=r"^https://", max_length=1000)
    keys: PushSubscriptionKeys


class PushSubscriptionRecord(BaseSchemaModel):
    """Stored subscription of one user."""

    user_id: UUID
    endpoint: str
    p256dh: str
    auth: str

    def as_subscription_info(self) -> dict[str, Any]:
        """Return the subscription in the shape pywebpush expects."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh, "auth": self.auth},
        }


class PushSendRequest(BaseSchemaModel):
    """Body of the single-recipient push endpoint."""

    user_id: UUID = Field(..., description="Recipient")
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=2000)
    action_url: str | None = Field(None, max_length=500)


class PushSendResponse(BaseSchemaModel):
    success: bool
    message: str
