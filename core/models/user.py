"""User model."""

import uuid
from typing import ClassVar

from django.db import models


class User(models.Model):
    """Platform user, read-only from the engine's point of view.

    The table is owned by the task-management platform; the engine only
    resolves recipients and their email address from it.
    """

    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=255, blank=True, default="")
    name = models.CharField(max_length=255, blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.name or self.user_id} ({self.email or 'no email'})"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(user_id={self.user_id}, email='{self.email}')>"
