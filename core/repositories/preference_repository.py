"""Preference persistence."""

from uuid import UUID

from core.models import NotificationPreferences
from core.schemas.preferences import NotificationPreferencesSchema


class DjangoPreferenceRepository:
    """Stores one NotificationPreferences row per user."""

    def get(self, user_id: UUID) -> NotificationPreferencesSchema | None:
        row = NotificationPreferences.objects.filter(user_id=user_id).first()
        if row is None:
            return None
        return NotificationPreferencesSchema.model_validate(row)

    def save(self, user_id: UUID, preferences: NotificationPreferencesSchema) -> None:
        NotificationPreferences.objects.update_or_create(
            user_id=user_id,
            defaults=preferences.model_dump(),
        )
