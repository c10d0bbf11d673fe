"""Read-model schemas for a user's notification history."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.enums import NotificationType
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationDraft(BaseSchemaModel):
    """Fields the in-app transport writes for one recipient."""

    user_id: UUID
    notification_type: NotificationType
    title: str
    message: str
    action_url: str | None = None
    related_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationRecord(BaseSchemaModel):
    """A stored notification as shown in the user's list."""

    notification_id: UUID = Field(..., description="Notification identifier")
    user_id: UUID = Field(..., description="Recipient")
    notification_type: NotificationType = Field(..., description="Notification type")
    title: str = Field(..., description="Rendered title")
    message: str = Field(..., description="Rendered message")
    is_read: bool = Field(..., description="Read flag")
    action_url: str | None = Field(None, description="Relative link into the web app")
    related_id: str | None = Field(None, description="Related task or workspace")
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(..., description="Creation time")


class NotificationPage(BaseSchemaModel):
    """One page of notifications, newest first."""

    notifications: list[NotificationRecord]
    next_cursor: str | None = Field(
        None, description="Opaque cursor for the next page; null on the last page"
    )
    has_more: bool


class UnreadCountResponse(BaseSchemaModel):
    """Unread badge count."""

    unread_count: int


class MarkAllReadResponse(BaseSchemaModel):
    """Number of notifications flipped to read."""

    updated_count: int
