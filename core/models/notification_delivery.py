"""NotificationDelivery model for per-channel delivery outcomes."""

from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import DeliveryChannel, DeliveryStatus


class NotificationDelivery(models.Model):
    """Outcome of delivering one notification through one channel.

    At most one row exists per (notification, channel) since a dispatch
    attempts each channel at most once. Backend observability only; these
    rows are never part of the user-facing notification list.

    Attributes:
        notification: The in-app notification the delivery belongs to.
        channel: Delivery channel (IN_APP, PUSH, EMAIL, CHAT).
        status: DELIVERED, SKIPPED or FAILED.
        reason: Why the channel was skipped.
        error_message: Error details if delivery failed.
        attempted_at: When the attempt finished.
    """

    notification = models.ForeignKey(
        "core.Notification",
        on_delete=models.CASCADE,
        related_name="deliveries",
        db_column="notification_id",
        help_text="Parent notification",
    )
    channel = models.CharField(
        max_length=20,
        choices=[(c.value, c.value) for c in DeliveryChannel],
        help_text="Delivery channel",
    )
    status = models.CharField(
        max_length=20,
        choices=[(s.value, s.value) for s in DeliveryStatus],
        help_text="Delivery outcome",
    )
    reason = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text="Skip reason",
    )
    error_message = models.TextField(
        null=True,
        blank=True,
        help_text="Error details if delivery failed",
    )
    attempted_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the delivery attempt finished",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notification_deliveries"
        managed = False
        unique_together: ClassVar[list[list[str]]] = [["notification", "channel"]]
        indexes: ClassVar[list] = [
            models.Index(fields=["status", "-attempted_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of the delivery."""
        return f"{self.channel} - {self.status}"

    def __repr__(self) -> str:
        """Return detailed representation of the delivery."""
        return (
            f"<NotificationDelivery(notification={self.notification_id}, "
            f"channel={self.channel}, "
            f"status={self.status})>"
        )
