"""Notification-related enumerations.

This module contains the closed set of notification types, the preference
categories they are grouped under, the per-category channel selectors and
the delivery channels and statuses recorded for every dispatch.
"""

from enum import Enum


class NotificationType(str, Enum):
    """Closed set of notification types a dispatch can produce."""

    TASK_ASSIGNED = "task_assigned"
    TASK_INVITATION = "task_invitation"
    SUBTASK_INVITATION = "subtask_invitation"
    TASK_COMPLETED = "task_completed"
    TASK_APPROVAL_REQUEST = "task_approval_request"
    TASK_APPROVED = "task_approved"
    TASK_REJECTED = "task_rejected"
    WORKSPACE_INVITATION = "workspace_invitation"
    COMMENT_ADDED = "comment_added"


class PreferenceCategory(str, Enum):
    """Preference categories; each owns one channel selector."""

    TASK_ASSIGNMENT = "task_assignment"
    TASK_INVITATION = "task_invitation"
    TASK_COMPLETION = "task_completion"
    TASK_APPROVAL = "task_approval"
    WORKSPACE_INVITATION = "workspace_invitation"
    COMMENTS = "comments"


class ChannelSelector(str, Enum):
    """Per-category choice of external channels."""

    NONE = "none"
    PUSH = "push"
    EMAIL = "email"
    CHAT = "chat"
    ALL = "all"


class DeliveryChannel(str, Enum):
    """Channels a notification can be delivered through."""

    IN_APP = "IN_APP"
    PUSH = "PUSH"
    EMAIL = "EMAIL"
    CHAT = "CHAT"


class DeliveryStatus(str, Enum):
    """Outcome of a single channel delivery attempt."""

    DELIVERED = "DELIVERED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


class InvitationStatus(str, Enum):
    """Invitation states reported by the task-management platform."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


CATEGORY_BY_TYPE: dict[NotificationType, PreferenceCategory] = {
    NotificationType.TASK_ASSIGNED: PreferenceCategory.TASK_ASSIGNMENT,
    NotificationType.TASK_INVITATION: PreferenceCategory.TASK_INVITATION,
    NotificationType.SUBTASK_INVITATION: PreferenceCategory.TASK_INVITATION,
    NotificationType.TASK_COMPLETED: PreferenceCategory.TASK_COMPLETION,
    NotificationType.TASK_APPROVAL_REQUEST: PreferenceCategory.TASK_APPROVAL,
    NotificationType.TASK_APPROVED: PreferenceCategory.TASK_APPROVAL,
    NotificationType.TASK_REJECTED: PreferenceCategory.TASK_APPROVAL,
    NotificationType.WORKSPACE_INVITATION: PreferenceCategory.WORKSPACE_INVITATION,
    NotificationType.COMMENT_ADDED: PreferenceCategory.COMMENTS,
}

# "all" fans out to the real-time channels; email is opt-in on its own.
CHANNELS_BY_SELECTOR: dict[ChannelSelector, frozenset[DeliveryChannel]] = {
    ChannelSelector.NONE: frozenset(),
    ChannelSelector.PUSH: frozenset({DeliveryChannel.PUSH}),
    ChannelSelector.EMAIL: frozenset({DeliveryChannel.EMAIL}),
    ChannelSelector.CHAT: frozenset({DeliveryChannel.CHAT}),
    ChannelSelector.ALL: frozenset({DeliveryChannel.PUSH, DeliveryChannel.CHAT}),
}
