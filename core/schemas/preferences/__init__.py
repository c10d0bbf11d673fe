"""Notification preference schemas."""

from core.schemas.preferences.notification_preferences import (
    NotificationPreferencesSchema,
)

__all__ = ["NotificationPreferencesSchema"]
