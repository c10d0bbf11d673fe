"""Preference store accessor.

Maps notification types to preference categories and category selectors to
the external channels a dispatch should use.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import structlog
from pydantic import ValidationError as PydanticValidationError

from core.enums import (
    CATEGORY_BY_TYPE,
    CHANNELS_BY_SELECTOR,
    ChannelSelector,
    DeliveryChannel,
    NotificationType,
)
from core.exceptions.notification_exceptions import ValidationError
from core.repositories.base import PreferenceRepository
from core.schemas.preferences import NotificationPreferencesSchema

logger = structlog.get_logger(__name__)


class PreferenceService:
    """Reads and replaces users' notification preferences."""

    def __init__(self, repository: PreferenceRepository) -> None:
        self._repository = repository

    def get_preferences(self, user_id: UUID) -> NotificationPreferencesSchema:
        """Return the user's preferences, or the all-``none`` default.

        Reading never creates a stored record.
        """
        stored = self._repository.get(user_id)
        if stored is None:
            return NotificationPreferencesSchema.default()
        return stored

    def set_preferences(
        self,
        user_id: UUID,
        preferences: NotificationPreferencesSchema | Mapping[str, Any],
    ) -> NotificationPreferencesSchema:
        """Replace all six selectors of the user.

        Args:
            user_id: User whose preferences are replaced
            preferences: Complete preferences, as a schema or a raw mapping
                (camelCase or snake_case keys)

        Returns:
            The stored preferences.

        Raises:
            ValidationError: If a category is missing or a selector is unknown;
                nothing is stored in that case.
        """
        if not isinstance(preferences, NotificationPreferencesSchema):
            try:
                preferences = NotificationPreferencesSchema.model_validate(
                    dict(preferences)
                )
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid notification preferences",
                    errors=e.errors(include_url=False, include_context=False),
                ) from e

        self._repository.save(user_id, preferences)
        logger.info(
            "notification_preferences_updated",
            user_id=str(user_id),
            **preferences.model_dump(),
        )
        return preferences

    @staticmethod
    def selector_for(
        preferences: NotificationPreferencesSchema,
        notification_type: NotificationType | str,
    ) -> ChannelSelector:
        """Return the selector governing ``notification_type``."""
        category = CATEGORY_BY_TYPE[NotificationType(notification_type)]
        return preferences.selector(category)

    @staticmethod
    def channels_for(selector: ChannelSelector | str) -> frozenset[DeliveryChannel]:
        """Return the external channels a selector enables."""
        return CHANNELS_BY_SELECTOR[ChannelSelector(selector)]

    def resolve_channels(
        self, user_id: UUID, notification_type: NotificationType | str
    ) -> frozenset[DeliveryChannel]:
        """External channels the user wants for this notification type."""
        preferences = self.get_preferences(user_id)
        return self.channels_for(self.selector_for(preferences, notification_type))
