"""Notification preferences as exchanged with the settings page."""

from pydantic import Field

from core.enums import ChannelSelector, PreferenceCategory
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationPreferencesSchema(BaseSchemaModel):
    """Channel selector for each of the six preference categories.

    Every field is required; updates replace the whole record.
    """

    task_assignment: ChannelSelector = Field(..., description="Task assignments")
    task_invitation: ChannelSelector = Field(..., description="Task invitations")
    task_completion: ChannelSelector = Field(..., description="Task completions")
    task_approval: ChannelSelector = Field(
        ..., description="Approval requests and review results"
    )
    workspace_invitation: ChannelSelector = Field(
        ..., description="Workspace invitations"
    )
    comments: ChannelSelector = Field(..., description="Comments on your tasks")

    @classmethod
    def default(cls) -> "NotificationPreferencesSchema":
        """Preferences of a user who never saved any: external channels off."""
        return cls(
            **{category.value: ChannelSelector.NONE for category in PreferenceCategory}
        )

    def selector(self, category: PreferenceCategory) -> ChannelSelector:
        return ChannelSelector(getattr(self, category.value))
