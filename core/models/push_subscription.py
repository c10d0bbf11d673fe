"""Web Push subscription registered by a user's browser."""

from django.db import models


class PushSubscription(models.Model):
    """The single active Web Push subscription of a user."""

    user = models.OneToOneField(
        "core.User",
        on_delete=models.CASCADE,
        primary_key=True,
        db_column="user_id",
        related_name="push_subscription",
    )
    endpoint = models.URLField(max_length=1000)
    p256dh = models.CharField(max_length=255)
    auth = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "push_subscriptions"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the subscription."""
        return f"Push subscription for user {self.user_id}"
