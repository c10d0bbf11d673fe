"""Per-channel delivery results and the outcome of a dispatch."""

from uuid import UUID

from pydantic import Field, computed_field

from core.enums import DeliveryChannel, DeliveryStatus, NotificationType
from core.schemas.base_schema_model import BaseSchemaModel


class DeliveryResult(BaseSchemaModel):
    """Result of one channel attempt: delivered, skipped(reason) or failed(error).

    The in-app transport also reports the id of the notification it wrote.
    """

    status: DeliveryStatus
    reason: str | None = None
    error: str | None = None
    notification_id: UUID | None = None

    @classmethod
    def delivered(cls, notification_id: UUID | None = None) -> "DeliveryResult":
        return cls(status=DeliveryStatus.DELIVERED, notification_id=notification_id)

    @classmethod
    def skipped(cls, reason: str) -> "DeliveryResult":
        return cls(status=DeliveryStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, error: str) -> "DeliveryResult":
        return cls(status=DeliveryStatus.FAILED, error=error)

    @property
    def is_delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED.value


class RecipientOutcome(BaseSchemaModel):
    """Channel results for one recipient, keyed by channel name."""

    recipient_id: UUID
    notification_id: UUID | None = None
    channels: dict[str, DeliveryResult] = Field(default_factory=dict)

    def result_for(self, channel: DeliveryChannel) -> DeliveryResult | None:
        return self.channels.get(channel.value)


class DispatchOutcome(BaseSchemaModel):
    """Everything that happened during one dispatch call."""

    dispatch_id: str
    event_type: NotificationType
    recipients: list[RecipientOutcome] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def delivered_count(self) -> int:
        """Recipients that received their in-app notification."""
        return sum(
            1
            for outcome in self.recipients
            if (result := outcome.result_for(DeliveryChannel.IN_APP))
            and result.is_delivered
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skipped_recipients(self) -> list[UUID]:
        """Recipients that could not be resolved."""
        return [
            outcome.recipient_id
            for outcome in self.recipients
            if (result := outcome.result_for(DeliveryChannel.IN_APP))
            and result.status == DeliveryStatus.SKIPPED.value
        ]

    def for_recipient(self, recipient_id: UUID) -> RecipientOutcome | None:
        return next(
            (o for o in self.recipients if o.recipient_id == recipient_id), None
        )


class EventSubmissionResponse(BaseSchemaModel):
    """Response of the event endpoints, inline or queued."""

    queued: bool = False
    job_ids: list[str] = Field(default_factory=list)
    outcomes: list[DispatchOutcome] = Field(default_factory=list)
