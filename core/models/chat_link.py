"""ChatLink model binding a user to an external chat identity."""

from typing import ClassVar

from django.db import models
from django.db.models import Q


class ChatLink(models.Model):
    """Verified or pending link between a user and a Telegram chat.

    A row holds either an outstanding verification code (pending) or a
    chat id with ``linked`` set. Disconnecting deletes the row.

    Attributes:
        user: The platform user.
        chat_id: Telegram chat id once linked.
        linked: Whether verification succeeded.
        verification_code: Outstanding 6-digit code, cleared when consumed.
        code_expires_at: Expiry of the outstanding code.
    """

    user = models.OneToOneField(
        "core.User",
        on_delete=models.CASCADE,
        primary_key=True,
        db_column="user_id",
        related_name="chat_link",
    )
    chat_id = models.CharField(max_length=64, null=True, blank=True)
    linked = models.BooleanField(default=False)
    verification_code = models.CharField(max_length=6, null=True, blank=True)
    code_expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "chat_links"
        managed = False
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["verification_code"],
                condition=Q(verification_code__isnull=False),
                name="chat_links_unique_outstanding_code",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of the chat link."""
        state = "linked" if self.linked else "pending"
        return f"Chat link for user {self.user_id} ({state})"
