"""Dispatch input: the domain event and its rendered message."""

from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from core.constants import MAX_RECIPIENTS_PER_EVENT
from core.enums import NotificationType
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationEvent(BaseSchemaModel):
    """One state change to fan out to its recipients.

    ``title`` and ``message`` are ``str.format`` templates filled from
    ``data`` once per dispatch. Recipients are de-duplicated preserving order.
    """

    type: NotificationType = Field(..., description="Notification type")
    recipient_ids: list[UUID] = Field(
        ...,
        min_length=1,
        max_length=MAX_RECIPIENTS_PER_EVENT,
        description="Users to notify",
    )
    title: str = Field(..., min_length=1, max_length=255, description="Title template")
    message: str = Field(..., min_length=1, description="Message template")
    data: dict[str, Any] = Field(
        default_factory=dict, description="Template substitution values"
    )
    action_url: str | None = Field(
        None, max_length=500, description="Relative link into the web app"
    )
    related_id: str | None = Field(
        None, max_length=255, description="Id of the task, subtask or workspace"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Extra details stored with the notification"
    )

    @field_validator("recipient_ids")
    @classmethod
    def dedupe_recipients(cls, value: list[UUID]) -> list[UUID]:
        """Drop repeated recipients, keeping first occurrence order."""
        return list(dict.fromkeys(value))


class RenderedMessage(BaseSchemaModel):
    """Channel-neutral message produced once per dispatch."""

    notification_type: NotificationType | None = None
    title: str
    message: str
    action_url: str | None = None
    related_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
