"""Notification model for the in-app notification history.

Per-channel delivery outcomes are recorded separately in the
NotificationDelivery model.
"""

import uuid
from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import NotificationType


class Notification(models.Model):
    """A single in-app notification shown to one user.

    Rows are written by the in-app transport during dispatch and are never
    deleted in normal operation; the read flag is the only field users change.

    Attributes:
        notification_id: Unique identifier for the notification.
        user: The user receiving this notification.
        notification_type: One of the closed set of notification types.
        title: Rendered title.
        message: Rendered message body.
        is_read: Whether the user has read this notification.
        action_url: Relative link into the web app, if any.
        related_id: Id of the task, subtask or workspace the event concerns.
        metadata: Free-form event details (comment text, rejection reason).
        created_at: When the notification was created.
        updated_at: When the notification was last updated.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    user = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="user_id",
        help_text="User receiving the notification",
    )
    notification_type = models.CharField(
        max_length=40,
        choices=[(t.value, t.value) for t in NotificationType],
        help_text="Notification type",
    )
    title = models.CharField(max_length=255, help_text="Rendered title")
    message = models.TextField(help_text="Rendered message body")
    is_read = models.BooleanField(
        default=False,
        help_text="Whether the notification has been read by the user",
    )
    action_url = models.CharField(
        max_length=500,
        null=True,
        blank=True,
        help_text="Relative link into the web app",
    )
    related_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Id of the task, subtask or workspace the event concerns",
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Free-form event details",
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the notification was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the notification was last updated",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at", "-notification_id"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user", "-created_at", "-notification_id"]),
            models.Index(fields=["user", "is_read"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.notification_type} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"type={self.notification_type}, "
            f"user={self.user_id}, "
            f"is_read={self.is_read})>"
        )
