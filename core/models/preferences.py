"""Per-user notification preferences."""

from django.db import models

from core.enums import ChannelSelector

SELECTOR_CHOICES = [(s.value, s.value) for s in ChannelSelector]


def _selector_field(label: str) -> models.CharField:
    return models.CharField(
        max_length=10,
        choices=SELECTOR_CHOICES,
        default=ChannelSelector.NONE.value,
        help_text=f"External channels for {label} notifications",
    )


class NotificationPreferences(models.Model):
    """Channel selector per preference category for one user.

    A missing row means every category is ``none``; reads never create one.
    """

    user = models.OneToOneField(
        "core.User",
        on_delete=models.CASCADE,
        primary_key=True,
        db_column="user_id",
        related_name="notification_preferences",
    )
    task_assignment = _selector_field("task assignment")
    task_invitation = _selector_field("task invitation")
    task_completion = _selector_field("task completion")
    task_approval = _selector_field("task approval")
    workspace_invitation = _selector_field("workspace invitation")
    comments = _selector_field("comment")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "notification_preferences"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the preferences."""
        return f"Notification preferences for user {self.user_id}"
